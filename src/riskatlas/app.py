"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI

from riskatlas import __version__
from riskatlas.api.chat import router as chat_router
from riskatlas.api.cors import AllowListCORSMiddleware
from riskatlas.api.exceptions import register_exception_handlers
from riskatlas.configs.config import AppConfig, get_app_config
from riskatlas.core.knowledge_base import KNOWLEDGE_BASE
from riskatlas.core.service.metrics import setup_metrics
from riskatlas.infra.logging import setup_logging
from riskatlas.infra.telemetry import init_telemetry

logger = logging.getLogger(__name__)


def _build_lifespan(config: AppConfig):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager for startup/shutdown events."""
        setup_logging(config.logging)
        logger.info(
            "Starting RiskAtlas chat API (model=%s, knowledge_base_chars=%d)",
            config.llm.model_name,
            len(KNOWLEDGE_BASE),
        )
        if not config.api_key:
            logger.warning(
                "ANTHROPIC_API_KEY not set; chat requests will fail with 500"
            )

        yield

        logger.info("Shutting down RiskAtlas chat API")

    return lifespan


def get_app(config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Middleware, metrics, tracing and logging are fixed from the startup
    config.  An explicit *config* is also pinned on ``app.state`` and
    served to the chat route; without one the route re-reads
    ``get_app_config()`` per request.
    """
    pinned = config
    config = config or get_app_config()

    app = FastAPI(
        title="RiskAtlas Chat API",
        description="Knowledge-base assistant relaying chat to Anthropic",
        version=__version__,
        lifespan=_build_lifespan(config),
    )
    app.state.config = pinned

    app.add_middleware(AllowListCORSMiddleware, config=config.cors)
    register_exception_handlers(app)
    setup_metrics(app, config.metrics, config.tracing)
    init_telemetry(app, config.tracing)

    app.include_router(chat_router)

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = get_app()


def main() -> None:
    """Run the API with uvicorn using the configured host and port."""
    config = get_app_config()
    uvicorn.run(
        "riskatlas.app:app",
        host=config.api.host,
        port=config.api.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
