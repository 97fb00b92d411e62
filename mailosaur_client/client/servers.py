"""Server lookup and disposable address generation."""

import secrets

from mailosaur_client.client.session import ApiSession, require_id
from mailosaur_client.config import ClientSettings
from mailosaur_client.models import Server, ServerListResult


def generate_email_address(server: str, smtp_host: str) -> str:
    """Return a random ``<token>.<server>@<smtp_host>`` address; nothing is stored."""
    server = require_id(server, "server")
    return f"{secrets.token_hex(5)}.{server}@{smtp_host}"


class Servers:
    def __init__(self, session: ApiSession, settings: ClientSettings):
        self._session = session
        self._settings = settings

    async def list(self) -> list[Server]:
        data = await self._session.get_json("api/servers")
        return ServerListResult.model_validate(data).items

    async def get(self, server: str) -> Server:
        server = require_id(server, "server")
        data = await self._session.get_json(f"api/servers/{server}")
        return Server.model_validate(data)

    def generate_email_address(self, server: str) -> str:
        """Disposable address on ``server``, used only as a send target."""
        return generate_email_address(server, self._settings.smtp_host)
