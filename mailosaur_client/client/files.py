"""Raw downloads: message source and attachment payloads."""

from mailosaur_client.client.session import ApiSession, require_id
from mailosaur_client.utils.logger import get_logger

logger = get_logger("mailosaur_client.files")


class Files:
    """Binary endpoints under ``api/files``."""

    def __init__(self, session: ApiSession):
        self._session = session

    async def get_email(self, message_id: str) -> bytes:
        """Raw RFC 822 source (.eml) of a message."""
        message_id = require_id(message_id, "message_id")
        content = await self._session.get_bytes(f"api/files/email/{message_id}")
        logger.debug("files.get_email", message_id=message_id, size=len(content))
        return content

    async def get_attachment(self, attachment_id: str) -> bytes:
        """Attachment payload; its length matches the attachment's ``length`` metadata."""
        attachment_id = require_id(attachment_id, "attachment_id")
        content = await self._session.get_bytes(f"api/files/attachments/{attachment_id}")
        logger.debug("files.get_attachment", attachment_id=attachment_id, size=len(content))
        return content
