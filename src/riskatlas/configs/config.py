"""Configuration management using pydantic-settings.

**Not a singleton**: each call to ``get_app_config()`` builds a fresh
``AppConfig`` so a changed ``.env`` or ``configs/config.yaml`` is picked
up by the next request.

Priority order (highest first):

1. Init kwargs (tests, ``get_app(config)``)
2. Environment variables (``RISKATLAS_`` prefix, ``__`` nesting)
3. ``.env`` dotenv file
4. Static YAML (``configs/config.yaml``)
5. File secrets

The Anthropic credential is also read from the conventional
``ANTHROPIC_API_KEY`` variable without the prefix.
"""

from pathlib import Path

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .system import (
    APIConfig,
    CORSConfig,
    LLMConfig,
    LoggingConfig,
    MetricsConfig,
    TracingConfig,
)

CONFIG_PY_PATH = Path(__file__).resolve()
PROJECT_ROOT = CONFIG_PY_PATH.parent.parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "configs"
STATIC_CONFIG_FILE = CONFIG_DIR / "config.yaml"

DOTENV_FILE_PATH = PROJECT_ROOT / ".env"
ENV_DELIMITER = "__"
ENV_PREFIX = "RISKATLAS_"

DEFAULT_ENCODING = "utf-8"


class AppConfig(BaseSettings):
    """Application configuration.

    The Anthropic key is looked up as ``ANTHROPIC_API_KEY`` first and
    ``RISKATLAS_ANTHROPIC_API_KEY`` second; when both are set the
    conventional name wins.  An ``anthropic_api_key`` init kwarg beats
    either.
    """

    model_config = SettingsConfigDict(
        env_file=DOTENV_FILE_PATH,
        env_file_encoding=DEFAULT_ENCODING,
        env_nested_delimiter=ENV_DELIMITER,
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        yaml_file=STATIC_CONFIG_FILE,
        yaml_file_encoding=DEFAULT_ENCODING,
    )

    anthropic_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "anthropic_api_key",
            "ANTHROPIC_API_KEY",
            "RISKATLAS_ANTHROPIC_API_KEY",
        ),
        description="Credential for the upstream Anthropic API",
    )

    api: APIConfig = Field(
        default_factory=APIConfig,
        description="API server settings",
    )

    cors: CORSConfig = Field(
        default_factory=CORSConfig,
        description="Cross-origin response headers",
    )

    llm: LLMConfig = Field(
        default_factory=LLMConfig,
        description="Upstream chat model settings",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging bootstrap settings",
    )

    metrics: MetricsConfig = Field(
        default_factory=MetricsConfig,
        description="Prometheus metrics settings",
    )

    tracing: TracingConfig = Field(
        default_factory=TracingConfig,
        description="OpenTelemetry tracing settings",
    )

    @property
    def api_key(self) -> str | None:
        """The configured credential, or ``None`` when unset or empty."""
        if self.anthropic_api_key is None:
            return None
        return self.anthropic_api_key.get_secret_value() or None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def get_app_config() -> AppConfig:
    """Get the application configuration (re-read on every call)."""
    return AppConfig()
