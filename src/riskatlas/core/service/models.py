"""Domain models for the relay service layer."""

from dataclasses import dataclass, field

from langchain_core.messages import BaseMessage


@dataclass
class ChatContext:
    """Per-request input to the relay service.

    ``history`` is already converted to langchain messages, oldest first;
    the service appends ``message`` as the trailing user turn.
    """

    message: str
    history: list[BaseMessage] = field(default_factory=list)


@dataclass(frozen=True)
class ChatResult:
    """Generated reply and the provider's token accounting."""

    text: str
    input_tokens: int
    output_tokens: int


class MalformedUpstreamResponse(Exception):
    """Raised when the model reply lacks a text block or usage counts."""
