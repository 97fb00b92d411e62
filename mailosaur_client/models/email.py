"""Pydantic models for the message resource (wire names kept as aliases)."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

_WIRE_CONFIG = {"populate_by_name": True, "extra": "ignore", "frozen": True}


class EmailAddress(BaseModel):
    """A ``{name, address}`` pair from the From/To/Cc lists."""

    name: str = ""
    address: str = ""

    model_config = _WIRE_CONFIG


class Link(BaseModel):
    href: str
    text: Optional[str] = None

    model_config = _WIRE_CONFIG


class Image(BaseModel):
    src: str  # may be a "cid:" reference to an inline attachment
    alt: Optional[str] = None

    model_config = _WIRE_CONFIG


class HtmlContent(BaseModel):
    """HTML body plus the links and images the service extracted from it."""

    body: Optional[str] = None
    links: list[Link] = []
    images: list[Image] = []

    model_config = _WIRE_CONFIG


class TextContent(BaseModel):
    """Plain-text body plus the links the service extracted from it."""

    body: Optional[str] = None
    links: list[Link] = []

    model_config = _WIRE_CONFIG


class Attachment(BaseModel):
    """Attachment metadata; the payload is fetched by id via ``files.get_attachment``."""

    id: str
    file_name: Optional[str] = Field(None, alias="fileName")
    content_type: Optional[str] = Field(None, alias="contentType")
    content_id: Optional[str] = Field(None, alias="contentId")
    length: Optional[int] = None
    creation_date: Optional[datetime] = Field(None, alias="creationDate")

    model_config = _WIRE_CONFIG


class Email(BaseModel):
    """A message as stored by the service.

    Summaries from ``list``/``search`` carry metadata and attachment metadata
    only; ``html`` and ``text`` are populated by ``get``.
    """

    id: str
    from_: list[EmailAddress] = Field(default_factory=list, alias="from")
    to: list[EmailAddress] = []
    cc: list[EmailAddress] = []
    bcc: list[EmailAddress] = []
    subject: str = ""
    senderhost: Optional[str] = None
    server: Optional[str] = None
    received: Optional[datetime] = None
    headers: dict[str, Any] = {}
    html: Optional[HtmlContent] = None
    text: Optional[TextContent] = None
    attachments: list[Attachment] = []

    model_config = _WIRE_CONFIG

    @property
    def is_summary(self) -> bool:
        return self.html is None and self.text is None

    def header(self, name: str, default: Any = None) -> Any:
        """Case-insensitive header lookup; casing is chosen by the sending server."""
        if name in self.headers:
            return self.headers[name]
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return default


class MessageListResult(BaseModel):
    """Envelope returned by the list and search endpoints."""

    items: list[Email] = []

    model_config = _WIRE_CONFIG
