"""Upstream chat model (langchain ``BaseChatModel``) construction."""

from .deps import LLMFactory, build_llm, get_llm_factory  # noqa: F401
