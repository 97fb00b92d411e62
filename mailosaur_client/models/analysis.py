"""Pydantic models for spam analysis results."""

from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator


class SpamAssassinRule(BaseModel):
    """One spam-filter rule that fired, with its numeric contribution."""

    rule: str
    description: str = ""
    score: float

    model_config = {"populate_by_name": True, "extra": "ignore", "frozen": True}


class SpamAnalysisResult(BaseModel):
    """Per-rule spam scoring for a single email."""

    email_id: Optional[str] = Field(None, alias="emailId")
    spam_assassin: list[SpamAssassinRule] = Field(default_factory=list, alias="spamAssassin")
    score: Optional[float] = None

    model_config = {"populate_by_name": True, "extra": "ignore", "frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _flatten_filter_results(cls, data: Any) -> Any:
        # Newer payloads nest the rules under spamFilterResults.
        if isinstance(data, dict) and "spamFilterResults" in data and "spamAssassin" not in data:
            nested = data.get("spamFilterResults") or {}
            data = {**data, "spamAssassin": nested.get("spamAssassin", [])}
        return data

    @property
    def total_score(self) -> float:
        if self.score is not None:
            return self.score
        return sum(rule.score for rule in self.spam_assassin)
