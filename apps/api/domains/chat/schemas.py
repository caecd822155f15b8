"""Pydantic schemas for the chat domain."""

from pydantic import BaseModel, Field


class ChatMessageIn(BaseModel):
    user_id: str = Field(..., min_length=1)
    text: str


class ChatReply(BaseModel):
    """Texts to send back, in order. May use simple Markdown."""

    replies: list[str]
