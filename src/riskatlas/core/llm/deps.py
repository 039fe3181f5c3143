"""Anthropic chat model factory."""

import logging
from collections.abc import Callable

from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel

from riskatlas.configs.system import LLMConfig

logger = logging.getLogger(__name__)

LLMFactory = Callable[[LLMConfig, str], BaseChatModel]
"""``(llm_config, api_key) -> chat model``, built per request."""


def build_llm(config: LLMConfig, api_key: str) -> ChatAnthropic:
    """Create a ``ChatAnthropic`` client for the Messages API.

    Retries default to zero so a single upstream failure surfaces as a
    single request failure.
    """
    return ChatAnthropic(
        model=config.model_name,
        api_key=api_key,
        max_tokens=config.max_tokens,
        max_retries=config.max_retries,
        default_request_timeout=(
            config.timeout.total_seconds() if config.timeout else None
        ),
    )


def get_llm_factory() -> LLMFactory:
    """FastAPI dependency, overridden in tests with a stub factory."""
    return build_llm
