"""Stub chat model, stub factory and test config builder shared by tests."""

from typing import Any

from langchain_core.messages import AIMessage, BaseMessage

from riskatlas.configs.config import AppConfig
from riskatlas.configs.system import LLMConfig

TEST_API_KEY = "sk-ant-test"


def make_reply(
    text: Any = "Hello!", input_tokens: int = 5, output_tokens: int = 3
) -> AIMessage:
    return AIMessage(
        content=text,
        usage_metadata={
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "total_tokens": input_tokens + output_tokens,
        },
    )


class StubChatModel:
    """Stands in for ``ChatAnthropic``; records every ``ainvoke`` call."""

    def __init__(
        self, reply: BaseMessage | None = None, error: Exception | None = None
    ) -> None:
        self.reply = reply if reply is not None else make_reply()
        self.error = error
        self.calls: list[list[BaseMessage]] = []

    async def ainvoke(self, messages: list[BaseMessage], *args, **kwargs) -> BaseMessage:
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        return self.reply


class StubLLMFactory:
    """Replaces ``build_llm``; records the config and key it was given."""

    def __init__(self, llm: StubChatModel) -> None:
        self.llm = llm
        self.calls: list[tuple[LLMConfig, str]] = []

    def __call__(self, config: LLMConfig, api_key: str) -> StubChatModel:
        self.calls.append((config, api_key))
        return self.llm


def build_test_config(**overrides: Any) -> AppConfig:
    values: dict[str, Any] = {
        "anthropic_api_key": TEST_API_KEY,
        "metrics": {"enabled": False},
        "tracing": {"enabled": False},
    }
    values.update(overrides)
    return AppConfig(**values)
