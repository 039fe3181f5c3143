"""Chat relay service layer."""

from .models import ChatContext, ChatResult, MalformedUpstreamResponse  # noqa: F401
from .prompt import build_system_prompt, get_system_prompt  # noqa: F401
from .relay import ChatRelayService  # noqa: F401
