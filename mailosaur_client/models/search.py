"""Search criteria for ``messages.search`` and ``messages.wait_for``."""

from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator, model_validator

from mailosaur_client.errors import ValidationError


def is_valid_address(value: str) -> bool:
    """Syntax check only; no DNS lookup."""
    if not value:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


class SearchCriteria(BaseModel):
    """Predicates matched server-side. At least one must be set."""

    sent_to: Optional[str] = Field(None, alias="sentTo")
    subject: Optional[str] = None
    body: Optional[str] = None

    model_config = {"populate_by_name": True, "extra": "forbid", "frozen": True}

    @field_validator("sent_to")
    @classmethod
    def _check_address(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"{value!r} is not a valid email address: {e}") from e
        return value

    @model_validator(mode="after")
    def _require_one(self) -> "SearchCriteria":
        if not (self.sent_to or self.subject or self.body):
            raise ValueError("at least one of sentTo, subject or body is required")
        return self

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(by_alias=True, exclude_none=True)


def coerce_criteria(criteria: Any) -> SearchCriteria:
    """Accept a SearchCriteria, a mapping (wire or snake_case keys) or None."""
    if isinstance(criteria, SearchCriteria):
        return criteria
    try:
        return SearchCriteria.model_validate(criteria or {})
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid search criteria",
            details=[err["msg"] for err in e.errors()],
        ) from e
