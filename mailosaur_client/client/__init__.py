"""API client: session plus message, file, analysis and server operations."""

from mailosaur_client.client.analysis import Analysis
from mailosaur_client.client.files import Files
from mailosaur_client.client.mailosaur import MailosaurClient
from mailosaur_client.client.messages import Messages
from mailosaur_client.client.servers import Servers, generate_email_address
from mailosaur_client.client.session import ApiSession

__all__ = [
    "Analysis",
    "ApiSession",
    "Files",
    "MailosaurClient",
    "Messages",
    "Servers",
    "generate_email_address",
]
