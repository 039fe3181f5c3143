"""Relay service: one system-prompted call to the upstream chat model.

The service is stateless apart from the injected model and the shared
system prompt.  Each ``reply`` sends::

    [SystemMessage(system_prompt), *history, HumanMessage(message)]

and returns the first text block of the answer together with the
provider's token counts.  Errors propagate unchanged; the API layer maps
them to its error payloads.
"""

import logging
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from riskatlas.infra.telemetry import (
    ATTR_UPSTREAM_HISTORY_TURNS,
    ATTR_UPSTREAM_INPUT_TOKENS,
    ATTR_UPSTREAM_MODEL,
    ATTR_UPSTREAM_OUTPUT_TOKENS,
    SPAN_UPSTREAM_MESSAGES,
    tracer,
)

from .metrics import observe_upstream_call, record_token_usage
from .models import ChatContext, ChatResult, MalformedUpstreamResponse

logger = logging.getLogger(__name__)

_BLOCK_TYPE_TEXT = "text"


def build_messages(system_prompt: str, ctx: ChatContext) -> list[BaseMessage]:
    """History in caller order, followed by the new user turn."""
    return [
        SystemMessage(content=system_prompt),
        *ctx.history,
        HumanMessage(content=ctx.message),
    ]


def _first_text_block(content: str | list[Any]) -> str:
    if isinstance(content, str):
        return content
    if not content:
        raise MalformedUpstreamResponse("Upstream reply has no content blocks")

    block = content[0]
    if isinstance(block, str):
        return block
    if isinstance(block, dict) and block.get("type", _BLOCK_TYPE_TEXT) == _BLOCK_TYPE_TEXT:
        text = block.get("text")
        if isinstance(text, str):
            return text
    raise MalformedUpstreamResponse(
        f"First upstream content block is not text: {block!r}"
    )


def to_chat_result(message: BaseMessage) -> ChatResult:
    """Extract reply text and usage counts from the model's answer."""
    if not isinstance(message, AIMessage):
        raise MalformedUpstreamResponse(
            f"Unexpected upstream message type: {type(message).__name__}"
        )
    usage = message.usage_metadata
    if not usage:
        raise MalformedUpstreamResponse("Upstream reply has no usage metadata")

    return ChatResult(
        text=_first_text_block(message.content),
        input_tokens=int(usage["input_tokens"]),
        output_tokens=int(usage["output_tokens"]),
    )


class ChatRelayService:
    """Sends a conversation to the upstream model under a fixed system prompt."""

    def __init__(
        self,
        llm: BaseChatModel,
        system_prompt: str,
        model_name: str = "unknown",
    ) -> None:
        self._llm = llm
        self._system_prompt = system_prompt
        self._model_name = model_name

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    async def reply(self, ctx: ChatContext) -> ChatResult:
        messages = build_messages(self._system_prompt, ctx)
        invoke = observe_upstream_call(self._model_name)(self._llm.ainvoke)

        with tracer.start_as_current_span(SPAN_UPSTREAM_MESSAGES) as span:
            span.set_attribute(ATTR_UPSTREAM_MODEL, self._model_name)
            span.set_attribute(ATTR_UPSTREAM_HISTORY_TURNS, len(ctx.history))

            answer = await invoke(messages)
            result = to_chat_result(answer)

            span.set_attribute(ATTR_UPSTREAM_INPUT_TOKENS, result.input_tokens)
            span.set_attribute(ATTR_UPSTREAM_OUTPUT_TOKENS, result.output_tokens)

        record_token_usage(self._model_name, result.input_tokens, result.output_tokens)
        logger.info(
            "Response generated successfully (input_tokens=%d, output_tokens=%d)",
            result.input_tokens,
            result.output_tokens,
        )
        return result
