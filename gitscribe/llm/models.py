"""Chat completion request models."""

from typing import Literal, Optional

from pydantic import BaseModel


Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    """A single chat message."""

    role: Role
    content: str


class CompletionRequest(BaseModel):
    """Body of a `/chat/completions` request."""

    model: str
    messages: list[ChatMessage]
    temperature: Optional[float] = None

    def to_payload(self) -> dict:
        """Return the JSON payload, omitting an unset temperature."""
        return self.model_dump(exclude_none=True)
