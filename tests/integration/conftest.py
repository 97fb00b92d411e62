"""Live-service fixtures: drain the server, send five emails over SMTP, list them.

Requirements:
- MAILOSAUR_API_KEY and MAILOSAUR_SERVER (tests are skipped otherwise)
- optional MAILOSAUR_BASE_URL, MAILOSAUR_SMTP_HOST, MAILOSAUR_SMTP_PORT
- network access to the API and the SMTP port
"""

import asyncio
import smtplib
import sys
import time
import uuid
from collections.abc import Awaitable, Callable
from email.message import EmailMessage
from pathlib import Path
from typing import TypeVar

import pytest

# Allow importing mailosaur_client when running from project root without installing
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from mailosaur_client import ClientSettings, Email, MailosaurClient
from mailosaur_client.client import generate_email_address
from mailosaur_client.config import default_server

T = TypeVar("T")

RESOURCES = Path(__file__).resolve().parent / "resources"
HTML_TEMPLATE = (RESOURCES / "testEmail.html").read_text(encoding="utf-8")
TEXT_TEMPLATE = (RESOURCES / "testEmail.txt").read_text(encoding="utf-8")

INLINE_CID = "ii_1435fadb31d523f6"
CAT_PNG_LENGTH = 82138
DOG_PNG_LENGTH = 212080
EMAIL_COUNT = 5
DELIVERY_GRACE_SECONDS = 2


def _payload(length: int, seed: int) -> bytes:
    pattern = bytes((seed + i) % 256 for i in range(256))
    return (pattern * (length // 256 + 1))[:length]


CAT_PNG = _payload(CAT_PNG_LENGTH, 7)
DOG_PNG = _payload(DOG_PNG_LENGTH, 13)


class MailFixture:
    """Sends test mail over SMTP and runs client operations on a fresh event loop."""

    def __init__(self, settings: ClientSettings, server: str):
        self.settings = settings
        self.server = server

    def run(self, operation: Callable[[MailosaurClient], Awaitable[T]]) -> T:
        async def _run() -> T:
            async with MailosaurClient(self.settings) as client:
                return await operation(client)

        return asyncio.run(_run())

    def address(self) -> str:
        return generate_email_address(self.server, self.settings.smtp_host)

    def send_email(self, send_to: str | None = None) -> str:
        """Send one HTML+text email with two PNG attachments; returns its unique token."""
        token = uuid.uuid4().hex[:8]
        from_address = self.address()
        to_address = send_to or self.address()

        msg = EmailMessage()
        msg["Subject"] = f"{token} subject"
        msg["From"] = f"{token} {token} <{from_address}>"
        msg["To"] = f"{token} {token} <{to_address}>"
        msg.set_content(TEXT_TEMPLATE.replace("REPLACED_DURING_TEST", token), cte="base64")
        msg.add_alternative(HTML_TEMPLATE.replace("REPLACED_DURING_TEST", token), subtype="html", cte="base64")
        msg.get_payload()[1].add_related(
            CAT_PNG, maintype="image", subtype="png", cid=f"<{INLINE_CID}>", filename="cat.png"
        )
        msg.add_attachment(DOG_PNG, maintype="image", subtype="png", filename="dog.png")

        with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port, timeout=30) as smtp:
            smtp.send_message(msg)
        return token


@pytest.fixture(scope="session")
def mail() -> MailFixture:
    try:
        settings = ClientSettings.from_env()
    except ValueError:
        pytest.skip("MAILOSAUR_API_KEY environment variable not set")
    server = default_server()
    if not server:
        pytest.skip("MAILOSAUR_SERVER environment variable not set")
    return MailFixture(settings, server)


@pytest.fixture(scope="session")
def emails(mail: MailFixture) -> list[Email]:
    """Five fresh summaries; also covers delete_all and list."""
    mail.run(lambda client: client.messages.delete_all(mail.server))
    for _ in range(EMAIL_COUNT):
        mail.send_email()
    time.sleep(DELIVERY_GRACE_SECONDS)
    results = mail.run(lambda client: client.messages.list(mail.server))
    assert len(results) == EMAIL_COUNT
    return results
