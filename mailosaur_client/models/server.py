"""Pydantic models for the server resource."""

from typing import Optional

from pydantic import BaseModel


class Server(BaseModel):
    """A logical mailbox namespace scoping test emails."""

    id: str
    name: Optional[str] = None
    users: list[str] = []
    messages: int = 0

    model_config = {"populate_by_name": True, "extra": "ignore", "frozen": True}


class ServerListResult(BaseModel):
    items: list[Server] = []

    model_config = {"extra": "ignore", "frozen": True}
