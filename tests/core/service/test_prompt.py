"""Tests for system prompt construction."""

from riskatlas.core.knowledge_base import KNOWLEDGE_BASE
from riskatlas.core.service.prompt import (
    SYSTEM_PROMPT_GUIDELINES,
    SYSTEM_PROMPT_PREAMBLE,
    build_system_prompt,
    get_system_prompt,
)


class TestSystemPrompt:
    def test_contains_knowledge_base_verbatim(self):
        assert KNOWLEDGE_BASE in get_system_prompt()

    def test_layout(self):
        prompt = build_system_prompt()
        assert prompt.startswith(SYSTEM_PROMPT_PREAMBLE)
        assert prompt.endswith(SYSTEM_PROMPT_GUIDELINES)
        assert prompt.index(SYSTEM_PROMPT_PREAMBLE) < prompt.index(KNOWLEDGE_BASE)

    def test_built_once(self):
        get_system_prompt.cache_clear()
        first = get_system_prompt()
        assert get_system_prompt() is first
        assert first == build_system_prompt()

    def test_custom_knowledge_base(self):
        prompt = build_system_prompt("Only this.")
        assert "\n\nOnly this.\n\n" in prompt
        assert KNOWLEDGE_BASE not in prompt

    def test_knowledge_base_mentions_core_concepts(self):
        for phrase in ("Insurability Score", "14 Lines of Business", "115"):
            assert phrase in KNOWLEDGE_BASE
