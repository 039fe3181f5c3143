from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ALLOWED_ORIGINS = [
    "https://riskatlas.ai",
    "http://localhost:3000",
    "https://www.riskatlas.ai",
]


class APIConfig(BaseModel):
    """API server settings."""

    host: str = Field(default="0.0.0.0", description="API server host")
    port: int = Field(default=8000, description="API server port")


class CORSConfig(BaseModel):
    """Cross-origin headers emitted on every response."""

    allowed_origins: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS),
        description="Origins echoed back verbatim; any other origin gets '*'",
    )
    allow_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        description="Value of Access-Control-Allow-Methods",
    )
    allow_headers: list[str] = Field(
        default_factory=lambda: [
            "Content-Type",
            "Authorization",
            "X-Requested-With",
        ],
        description="Value of Access-Control-Allow-Headers",
    )
    allow_credentials: bool = Field(
        default=True, description="Value of Access-Control-Allow-Credentials"
    )
    max_age: timedelta = Field(
        default_factory=lambda: timedelta(hours=24),
        description="Preflight cache lifetime. YAML may use seconds as int.",
    )


class LLMConfig(BaseModel):
    """Upstream Anthropic chat model settings."""

    model_config = ConfigDict(protected_namespaces=())

    model_name: str = Field(
        default="claude-haiku-4-20250514", description="Anthropic model id"
    )
    max_tokens: int = Field(
        default=1024, description="Maximum generated tokens per reply"
    )
    max_retries: int = Field(
        default=0, description="Client-side retries on upstream failure"
    )
    timeout: timedelta | None = Field(
        default=None,
        description="Upstream request timeout; client library default when unset",
    )


class LoggingConfig(BaseModel):
    """Root logger settings."""

    level: str = Field(default="INFO", description="Root log level")
    json_output: bool = Field(
        default=True, description="JSON lines when true, coloured text otherwise"
    )


class MetricsConfig(BaseModel):
    """Prometheus exposition settings."""

    enabled: bool = Field(default=True, description="Expose /metrics")


class TracingConfig(BaseModel):
    """OpenTelemetry tracing settings (OTLP over HTTP with basic auth)."""

    enabled: bool = Field(default=False, description="Enable OTEL tracing")
    endpoint: str = Field(default="", description="OTLP HTTP traces endpoint")
    username: str = Field(default="", description="Basic auth user")
    password: str = Field(default="", description="Basic auth password")
    service_name: str = Field(default="riskatlas-api")
    sample_rate: float = Field(default=1.0, ge=0.0, le=1.0)
    excluded_urls: list[str] = Field(
        default_factory=lambda: ["/health", "/metrics"],
        description="Paths not traced by the FastAPI instrumentor",
    )
