"""In-memory stand-in for the service, served through ``httpx.MockTransport``.

Messages can be seeded from a JSON file (a list, or ``{"items": [...]}`` in
wire format) or added programmatically with ``add_message``.
"""

import base64
import json
import re
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import httpx

from mailosaur_client.models.search import is_valid_address
from mailosaur_client.utils.logger import get_logger

logger = get_logger("mailosaur_client.testing")

_MESSAGE_PATH = re.compile(r"^/api/messages/(?P<id>[^/]+)$")
_EMAIL_FILE_PATH = re.compile(r"^/api/files/email/(?P<id>[^/]+)$")
_ATTACHMENT_PATH = re.compile(r"^/api/files/attachments/(?P<id>[^/]+)$")
_SPAM_PATH = re.compile(r"^/api/analysis/spam/(?P<id>[^/]+)$")
_SERVER_PATH = re.compile(r"^/api/servers/(?P<id>[^/]+)$")

DEFAULT_SPAM_RULES = [
    {"rule": "HTML_MESSAGE", "description": "BODY: HTML included in message", "score": 0.0},
    {"rule": "MIME_HTML_MOSTLY", "description": "BODY: Multipart message mostly text/html MIME", "score": 0.1},
]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


def _parse_datetime(s: str | None) -> Optional[datetime]:
    if not s:
        return None
    try:
        parsed = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _error(status: int, error_type: str, **messages: str) -> httpx.Response:
    return httpx.Response(status, json={"type": error_type, "messages": messages})


class MockMailosaurService:
    """Mock service: messages, files, spam analysis and servers kept in memory."""

    def __init__(
        self,
        api_key: str = "test-api-key",
        servers: tuple[str, ...] = ("abc123",),
        seed_path: Optional[Path] = None,
    ):
        self._expected_auth = "Basic " + base64.b64encode(f"{api_key}:".encode()).decode()
        self._servers: dict[str, dict[str, Any]] = {
            sid: {"id": sid, "name": f"Server {sid}", "users": [], "messages": 0} for sid in servers
        }
        self._messages: dict[str, dict[str, Any]] = {}
        self._raw: dict[str, bytes] = {}
        self._attachments: dict[str, bytes] = {}
        self._spam: dict[str, list[dict[str, Any]]] = {}
        self.requests: list[httpx.Request] = []
        if seed_path is not None:
            self.load_messages(seed_path)

    # --- seeding -------------------------------------------------------

    def load_messages(self, path: Path) -> int:
        """Load wire-format messages from JSON; each needs at least ``id`` and ``server``."""
        if not path.exists():
            logger.warning("mock_service.seed_missing", path=str(path))
            return 0
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        items = data if isinstance(data, list) else data.get("items", [])
        for item in items:
            self._servers.setdefault(item["server"], {"id": item["server"], "name": item["server"], "users": [], "messages": 0})
            self._messages[item["id"]] = item
        logger.info("mock_service.seed_loaded", path=str(path), count=len(items))
        return len(items)

    def add_message(
        self,
        server: str,
        *,
        subject: str,
        sent_to: str,
        sender: str = "sender@example.com",
        html: str = "",
        text: str = "",
        attachments: tuple[tuple[str, str, bytes], ...] = (),
        received: Optional[datetime] = None,
        spam_rules: Optional[list[dict[str, Any]]] = None,
    ) -> str:
        """Store a message as if it had been delivered; returns its id.

        ``attachments`` holds ``(file_name, content_type, payload)`` tuples.
        """
        message_id = str(uuid.uuid4())
        received = received or _now()
        attachment_meta = []
        for file_name, content_type, payload in attachments:
            attachment_id = str(uuid.uuid4())
            self._attachments[attachment_id] = payload
            attachment_meta.append(
                {
                    "id": attachment_id,
                    "fileName": file_name,
                    "contentType": content_type,
                    "length": len(payload),
                    "creationDate": _iso(received),
                }
            )
        from_entry = {"name": sender.split("@")[0], "address": sender}
        to_entry = {"name": sent_to.split("@")[0], "address": sent_to}
        self._messages[message_id] = {
            "id": message_id,
            "server": server,
            "from": [from_entry],
            "to": [to_entry],
            "subject": subject,
            "senderhost": "127.0.0.1",
            "received": _iso(received),
            "headers": {
                "From": f"{from_entry['name']} <{sender}>",
                "To": f"{to_entry['name']} <{sent_to}>",
                "Subject": subject,
            },
            "html": {"body": html, "links": _links(html, html=True), "images": _images(html)},
            "text": {"body": text, "links": _links(text, html=False)},
            "attachments": attachment_meta,
        }
        self._raw[message_id] = (
            f"From: {sender}\r\nTo: {sent_to}\r\nSubject: {subject}\r\n\r\n{text}\r\n"
        ).encode("utf-8")
        self._spam[message_id] = spam_rules if spam_rules is not None else list(DEFAULT_SPAM_RULES)
        return message_id

    def message_ids(self, server: Optional[str] = None) -> list[str]:
        return [m["id"] for m in self._messages.values() if server is None or m["server"] == server]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    # --- request handling ----------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.headers.get("Authorization") != self._expected_auth:
            return _error(401, "AuthenticationError", key="Invalid API key")

        path = request.url.path
        method = request.method
        if path == "/api/messages/search" and method == "POST":
            return self._search(request)
        if path == "/api/messages":
            if method == "GET":
                return self._list(request)
            if method == "DELETE":
                return self._delete_all(request)
        if m := _MESSAGE_PATH.match(path):
            if method == "GET":
                return self._get(m["id"])
            if method == "DELETE":
                return self._delete(m["id"])
        if method == "GET":
            if m := _EMAIL_FILE_PATH.match(path):
                raw = self._raw.get(m["id"])
                return httpx.Response(200, content=raw) if raw is not None else httpx.Response(404)
            if m := _ATTACHMENT_PATH.match(path):
                payload = self._attachments.get(m["id"])
                return httpx.Response(200, content=payload) if payload is not None else httpx.Response(404)
            if m := _SPAM_PATH.match(path):
                return self._spam_analysis(m["id"])
            if path == "/api/servers":
                return httpx.Response(200, json={"items": [self._server(sid) for sid in self._servers]})
            if m := _SERVER_PATH.match(path):
                if m["id"] not in self._servers:
                    return httpx.Response(404)
                return httpx.Response(200, json=self._server(m["id"]))
        return httpx.Response(404)

    def _server(self, server_id: str) -> dict[str, Any]:
        return {**self._servers[server_id], "messages": len(self.message_ids(server_id))}

    def _summaries(self, server: str) -> list[dict[str, Any]]:
        matching = [m for m in self._messages.values() if m["server"] == server]
        matching.sort(key=lambda m: m.get("received") or "", reverse=True)
        return [{k: v for k, v in m.items() if k not in ("html", "text")} for m in matching]

    def _list(self, request: httpx.Request) -> httpx.Response:
        server = request.url.params.get("server", "")
        if server not in self._servers:
            return httpx.Response(404)
        return httpx.Response(200, json={"items": self._summaries(server)})

    def _search(self, request: httpx.Request) -> httpx.Response:
        server = request.url.params.get("server", "")
        if server not in self._servers:
            return httpx.Response(404)
        criteria = json.loads(request.content or b"{}")
        sent_to = criteria.get("sentTo")
        subject = criteria.get("subject")
        body = criteria.get("body")
        if not (sent_to or subject or body):
            return _error(400, "ValidationError", criteria="Please provide at least one search criteria")
        if sent_to is not None and not is_valid_address(sent_to):
            return _error(400, "ValidationError", sentTo="Invalid email address")
        received_after = _parse_datetime(request.url.params.get("receivedAfter"))

        items = []
        for summary in self._summaries(server):
            full = self._messages[summary["id"]]
            if sent_to and not any(t["address"].lower() == sent_to.lower() for t in full["to"]):
                continue
            if subject and subject not in full["subject"]:
                continue
            if body and body not in (full["html"]["body"] or "") and body not in (full["text"]["body"] or ""):
                continue
            if received_after is not None:
                received = _parse_datetime(full.get("received"))
                if received is None or received < received_after:
                    continue
            items.append(summary)
        return httpx.Response(200, json={"items": items})

    def _get(self, message_id: str) -> httpx.Response:
        message = self._messages.get(message_id)
        if message is None:
            return httpx.Response(404)
        return httpx.Response(200, json=message)

    def _delete(self, message_id: str) -> httpx.Response:
        message = self._messages.pop(message_id, None)
        if message is None:
            return httpx.Response(404)
        for attachment in message.get("attachments", []):
            self._attachments.pop(attachment["id"], None)
        self._raw.pop(message_id, None)
        self._spam.pop(message_id, None)
        return httpx.Response(204)

    def _delete_all(self, request: httpx.Request) -> httpx.Response:
        server = request.url.params.get("server", "")
        for message_id in self.message_ids(server):
            self._delete(message_id)
        return httpx.Response(204)

    def _spam_analysis(self, message_id: str) -> httpx.Response:
        if message_id not in self._messages:
            return httpx.Response(404)
        return httpx.Response(200, json={"emailId": message_id, "spamAssassin": self._spam[message_id]})


_HREF_RE = re.compile(r'<a\s[^>]*href="(?P<href>[^"]+)"[^>]*>(?P<text>.*?)</a>', re.IGNORECASE | re.DOTALL)
_IMG_RE = re.compile(r"<img\s[^>]*>", re.IGNORECASE)
_ATTR_RE = re.compile(r'(?P<name>src|alt)="(?P<value>[^"]*)"', re.IGNORECASE)
_URL_RE = re.compile(r"https?://\S+")


def _links(body: str, html: bool) -> list[dict[str, Any]]:
    if not body:
        return []
    if not html:
        return [{"href": url, "text": url} for url in _URL_RE.findall(body)]
    links = []
    for match in _HREF_RE.finditer(body):
        text = re.sub(r"<[^>]+>", "", match["text"]).strip()
        link: dict[str, Any] = {"href": match["href"]}
        if text:
            link["text"] = text
        links.append(link)
    return links


def _images(body: str) -> list[dict[str, Any]]:
    images = []
    for tag in _IMG_RE.findall(body or ""):
        attrs = {m["name"].lower(): m["value"] for m in _ATTR_RE.finditer(tag)}
        if "src" in attrs:
            images.append({"src": attrs["src"], "alt": attrs.get("alt")})
    return images
