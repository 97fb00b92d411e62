"""Spam analysis."""

from mailosaur_client.client.session import ApiSession, require_id
from mailosaur_client.models import SpamAnalysisResult


class Analysis:
    def __init__(self, session: ApiSession):
        self._session = session

    async def spam(self, message_id: str) -> SpamAnalysisResult:
        """Score a message against the service's spam-filter rules."""
        message_id = require_id(message_id, "message_id")
        data = await self._session.get_json(f"api/analysis/spam/{message_id}")
        result = SpamAnalysisResult.model_validate(data)
        if result.email_id is None:
            result = result.model_copy(update={"email_id": message_id})
        return result
