"""Pydantic models for service resources."""

from mailosaur_client.models.analysis import SpamAnalysisResult, SpamAssassinRule
from mailosaur_client.models.email import (
    Attachment,
    Email,
    EmailAddress,
    HtmlContent,
    Image,
    Link,
    MessageListResult,
    TextContent,
)
from mailosaur_client.models.search import SearchCriteria
from mailosaur_client.models.server import Server, ServerListResult

__all__ = [
    "Attachment",
    "Email",
    "EmailAddress",
    "HtmlContent",
    "Image",
    "Link",
    "MessageListResult",
    "TextContent",
    "SearchCriteria",
    "SpamAnalysisResult",
    "SpamAssassinRule",
    "Server",
    "ServerListResult",
]
