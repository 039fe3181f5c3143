"""Pydantic models for the chat API."""

from typing import Literal

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from pydantic import BaseModel, Field

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


class ChatTurn(BaseModel):
    """A single prior message in the conversation."""

    role: Literal["user", "assistant"] = Field(description="Message sender role")
    content: str = Field(description="Message content")

    def to_message(self) -> BaseMessage:
        if self.role == ROLE_USER:
            return HumanMessage(content=self.content)
        return AIMessage(content=self.content)


class ChatRequest(BaseModel):
    """Request body for the chat endpoint."""

    message: str = Field(min_length=1, description="New user message")
    history: list[ChatTurn] = Field(
        default_factory=list,
        description="Previous conversation turns, oldest first",
    )

    def history_messages(self) -> list[BaseMessage]:
        return [turn.to_message() for turn in self.history]


class TokenUsage(BaseModel):
    """Token counts reported by the upstream provider."""

    input_tokens: int
    output_tokens: int


class ChatResponse(BaseModel):
    """Successful chat reply."""

    response: str = Field(description="Generated reply text")
    usage: TokenUsage


class ErrorResponse(BaseModel):
    """Error payload; ``details`` is left out of the JSON when unset."""

    error: str
    details: str | None = None

    def to_content(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)
