"""Message operations: list, get, search, wait_for, delete, delete_all."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from mailosaur_client.client.session import ApiSession, require_id
from mailosaur_client.config import ClientSettings
from mailosaur_client.errors import ValidationError, WaitTimeoutError
from mailosaur_client.models import Email, MessageListResult, SearchCriteria
from mailosaur_client.models.search import coerce_criteria
from mailosaur_client.utils.logger import get_logger

logger = get_logger("mailosaur_client.messages")

MESSAGES_PATH = "api/messages"

# Slack for client clock running ahead of the service clock
RECEIVED_AFTER_GRACE = timedelta(seconds=5)


def _earliest(matches: list[Email]) -> Email:
    dated = [m for m in matches if m.received is not None]
    if not dated:
        return matches[0]
    return min(dated, key=lambda m: m.received)


class Messages:
    """Operations on ``api/messages``, scoped by server id."""

    def __init__(self, session: ApiSession, settings: ClientSettings):
        self._session = session
        self._settings = settings

    async def list(self, server: str, page: Optional[int] = None, items_per_page: Optional[int] = None) -> list[Email]:
        """Summaries of every message on ``server`` (no bodies, attachment metadata only)."""
        params: dict[str, Any] = {"server": require_id(server, "server")}
        if page is not None:
            params["page"] = page
        if items_per_page is not None:
            params["itemsPerPage"] = items_per_page
        data = await self._session.get_json(MESSAGES_PATH, params=params)
        result = MessageListResult.model_validate(data)
        logger.debug("messages.list", server=server, count=len(result.items))
        return result.items

    async def get(self, message_id: str) -> Email:
        """Full message, including html/text bodies with extracted links and images."""
        message_id = require_id(message_id, "message_id")
        data = await self._session.get_json(f"{MESSAGES_PATH}/{message_id}")
        return Email.model_validate(data)

    async def search(
        self,
        server: str,
        criteria: SearchCriteria | dict[str, Any] | None = None,
        *,
        received_after: Optional[datetime] = None,
        page: Optional[int] = None,
        items_per_page: Optional[int] = None,
    ) -> list[Email]:
        """Summaries matching ``criteria``; matching semantics belong to the service.

        Empty criteria or a malformed ``sentTo`` raise ValidationError before any
        request is sent.
        """
        query = coerce_criteria(criteria)
        params: dict[str, Any] = {"server": require_id(server, "server")}
        if received_after is not None:
            params["receivedAfter"] = received_after.isoformat()
        if page is not None:
            params["page"] = page
        if items_per_page is not None:
            params["itemsPerPage"] = items_per_page
        data = await self._session.post_json(f"{MESSAGES_PATH}/search", query.to_payload(), params=params)
        result = MessageListResult.model_validate(data)
        logger.debug("messages.search", server=server, criteria=query.to_payload(), count=len(result.items))
        return result.items

    async def wait_for(
        self,
        server: str,
        criteria: SearchCriteria | dict[str, Any] | None = None,
        *,
        timeout: Optional[float] = None,
        received_after: Optional[datetime] = None,
    ) -> Email:
        """Poll until a matching message arrives and return it in full.

        Only messages received at or after ``received_after`` count. It
        defaults to the moment of the call minus ``RECEIVED_AFTER_GRACE``,
        since the service compares against its own clock. When several match,
        the earliest received wins. ``timeout`` seconds (settings default when
        None) bound the whole call, in-flight requests included; on expiry
        WaitTimeoutError is raised. Any other error surfaces immediately.
        """
        query = coerce_criteria(criteria)
        timeout = self._settings.wait_timeout if timeout is None else timeout
        if timeout <= 0:
            raise ValidationError("timeout must be greater than zero")
        since = received_after or datetime.now(timezone.utc) - RECEIVED_AFTER_GRACE

        log = logger.bind(server=server, criteria=query.to_payload())
        attempts = 0

        async def poll() -> Email:
            nonlocal attempts
            while True:
                attempts += 1
                matches = await self.search(server, query, received_after=since)
                if matches:
                    match = _earliest(matches)
                    log.info("messages.wait_for.match", attempt=attempts, message_id=match.id)
                    return await self.get(match.id)
                log.debug("messages.wait_for.poll", attempt=attempts)
                await asyncio.sleep(self._settings.poll_interval)

        try:
            return await asyncio.wait_for(poll(), timeout)
        except asyncio.TimeoutError as e:
            log.warning("messages.wait_for.timeout", attempts=attempts, timeout=timeout)
            raise WaitTimeoutError(f"No matching message on server {server!r} within {timeout:g}s") from e

    async def delete(self, message_id: str) -> None:
        """Delete one message. Deleting it again raises NotFoundError."""
        message_id = require_id(message_id, "message_id")
        await self._session.delete(f"{MESSAGES_PATH}/{message_id}")
        logger.info("messages.delete", message_id=message_id)

    async def delete_all(self, server: str) -> None:
        """Delete every message on ``server``; safe to repeat."""
        server = require_id(server, "server")
        await self._session.delete(MESSAGES_PATH, params={"server": server})
        logger.info("messages.delete_all", server=server)
