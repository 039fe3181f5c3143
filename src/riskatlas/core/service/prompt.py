from riskatlas.core.knowledge_base import KNOWLEDGE_BASE
from riskatlas.infra import singleton

SYSTEM_PROMPT_PREAMBLE = """You are a helpful assistant for RiskAtlas, a risk intelligence platform for the insurance industry.

Use the following knowledge base to answer questions accurately and conversationally. Be friendly, professional, and concise. If you don't know something, say so."""  # noqa: E501

SYSTEM_PROMPT_GUIDELINES = """Guidelines:
- Answer questions directly and clearly
- Use specific details from the knowledge base when relevant
- Keep responses conversational but professional
- If asked about features not in the knowledge base, acknowledge the limitation
- For technical questions, you can provide detail, but keep it accessible
- Encourage users to reach out for demos or more information when appropriate"""  # noqa: E501

SYSTEM_PROMPT_TEMPLATE = "{preamble}\n\n{knowledge_base}\n\n{guidelines}"


def build_system_prompt(knowledge_base: str = KNOWLEDGE_BASE) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(
        preamble=SYSTEM_PROMPT_PREAMBLE,
        knowledge_base=knowledge_base,
        guidelines=SYSTEM_PROMPT_GUIDELINES,
    )


@singleton
def get_system_prompt() -> str:
    """System prompt shared by every request, built once per process."""
    return build_system_prompt()
