"""Centralized FastAPI dependency type aliases.

Import these ``*Dep`` aliases in route modules instead of writing
``Annotated[T, Depends(get_xxx)]`` by hand.  Each alias maps to one
``get_*`` factory and can be overridden in tests via
``app.dependency_overrides[get_xxx] = ...``.
"""

from typing import Annotated

from fastapi import Depends, Request

from riskatlas.configs.config import AppConfig, get_app_config
from riskatlas.core.llm import LLMFactory, get_llm_factory


def get_request_config(request: Request) -> AppConfig:
    """Config pinned by ``get_app(config)``, else a fresh ``get_app_config()``."""
    pinned = getattr(request.app.state, "config", None)
    if pinned is not None:
        return pinned
    return get_app_config()


AppConfigDep = Annotated[AppConfig, Depends(get_request_config)]
LLMFactoryDep = Annotated[LLMFactory, Depends(get_llm_factory)]
