"""Async Python client for the Mailosaur email-testing API."""

__version__ = "0.1.0"

from mailosaur_client.client import MailosaurClient
from mailosaur_client.config import ClientSettings
from mailosaur_client.errors import (
    MailosaurError,
    NotFoundError,
    TransportError,
    ValidationError,
    WaitTimeoutError,
)
from mailosaur_client.models import (
    Attachment,
    Email,
    EmailAddress,
    Image,
    Link,
    SearchCriteria,
    Server,
    SpamAnalysisResult,
    SpamAssassinRule,
)
from mailosaur_client.utils.callbacks import with_callback

__all__ = [
    "__version__",
    "MailosaurClient",
    "ClientSettings",
    "MailosaurError",
    "NotFoundError",
    "TransportError",
    "ValidationError",
    "WaitTimeoutError",
    "Attachment",
    "Email",
    "EmailAddress",
    "Image",
    "Link",
    "SearchCriteria",
    "Server",
    "SpamAnalysisResult",
    "SpamAssassinRule",
    "with_callback",
]
