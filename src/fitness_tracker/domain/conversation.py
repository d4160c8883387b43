"""Conversation models for the coaching assistant."""

from typing import Literal

from pydantic import BaseModel


class ConversationTurn(BaseModel):
    """One message in the rolling chat window. Never persisted."""

    role: Literal["user", "assistant"]
    content: str
