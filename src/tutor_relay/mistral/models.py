"""Data models for Mistral chat completion responses."""

from typing import Literal

from pydantic import BaseModel, ConfigDict


class CompletionMessage(BaseModel):
    """Role-tagged message body of a completion choice."""

    model_config = ConfigDict(extra="allow")

    role: Literal["system", "user", "assistant", "tool"]
    content: str | None = None


class CompletionChoice(BaseModel):
    model_config = ConfigDict(extra="allow")

    message: CompletionMessage


class CompletionResult(BaseModel):
    """Chat completion returned by Mistral, passed back to the caller as-is.

    Only the documented shape is validated. Any other fields the API sends
    (usage, finish_reason, index) are kept.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    object: str
    created: int
    model: str
    choices: list[CompletionChoice]
