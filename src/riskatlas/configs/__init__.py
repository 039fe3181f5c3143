"""Application configuration (pydantic-settings)."""

from .config import AppConfig, get_app_config  # noqa: F401
from .system import (  # noqa: F401
    APIConfig,
    CORSConfig,
    LLMConfig,
    LoggingConfig,
    MetricsConfig,
    TracingConfig,
)
