"""MailosaurClient: one authenticated session, four resource groups."""

from typing import Optional

import httpx

from mailosaur_client.client.analysis import Analysis
from mailosaur_client.client.files import Files
from mailosaur_client.client.messages import Messages
from mailosaur_client.client.servers import Servers
from mailosaur_client.client.session import ApiSession
from mailosaur_client.config import ClientSettings
from mailosaur_client.utils.logger import get_logger

logger = get_logger("mailosaur_client.client")


class MailosaurClient:
    """Async client for the email-testing API.

    Use as an async context manager so the underlying HTTP connections are
    released::

        async with MailosaurClient(ClientSettings.from_env()) as client:
            email = await client.messages.wait_for(server, {"sentTo": address})
    """

    def __init__(
        self,
        settings: ClientSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self._session = ApiSession(settings, transport=transport)
        self.messages = Messages(self._session, settings)
        self.files = Files(self._session)
        self.analysis = Analysis(self._session)
        self.servers = Servers(self._session, settings)
        logger.info("client.init", base_url=settings.base_url)

    @classmethod
    def from_env(cls, transport: Optional[httpx.AsyncBaseTransport] = None) -> "MailosaurClient":
        return cls(ClientSettings.from_env(), transport=transport)

    @property
    def closed(self) -> bool:
        return self._session.closed

    async def close(self) -> None:
        await self._session.close()

    async def __aenter__(self) -> "MailosaurClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
