"""Prometheus metrics for the RiskAtlas chat relay.

Business metrics that complement the auto-instrumented HTTP metrics
provided by ``prometheus-fastapi-instrumentator``.

All metrics use the ``riskatlas_`` prefix.
"""

import functools
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from fastapi import FastAPI
from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

from riskatlas.configs.system import MetricsConfig, TracingConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Request outcomes
# ---------------------------------------------------------------------------

OUTCOME_OK = "ok"
OUTCOME_CLIENT_ERROR = "client_error"
OUTCOME_CONFIG_ERROR = "config_error"
OUTCOME_UPSTREAM_ERROR = "upstream_error"
OUTCOME_INTERNAL_ERROR = "internal_error"

CHAT_REQUESTS_TOTAL = Counter(
    "riskatlas_chat_requests_total",
    "Total chat relay requests, by outcome",
    ["outcome"],  # ok | client_error | config_error | upstream_error | internal_error
)

# ---------------------------------------------------------------------------
# Upstream model metrics
# ---------------------------------------------------------------------------

UPSTREAM_TOKENS_TOTAL = Counter(
    "riskatlas_upstream_tokens_total",
    "Tokens reported by the upstream provider",
    ["model_name", "direction"],  # direction: input | output
)

UPSTREAM_LATENCY_SECONDS = Histogram(
    "riskatlas_upstream_latency_seconds",
    "Latency of upstream chat completion calls",
    ["model_name", "status"],  # status: ok | error
    buckets=(0.25, 0.5, 1, 2, 5, 10, 20, 30, 60, 120),
)


def observe_upstream_call(
    model_name: str,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator recording latency of an async upstream call.

    The ``status`` label is ``error`` when the call raises.
    """

    def decorator(fn: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            start = time.monotonic()
            status = "ok"
            try:
                return await fn(*args, **kwargs)
            except BaseException:
                status = "error"
                raise
            finally:
                UPSTREAM_LATENCY_SECONDS.labels(
                    model_name=model_name, status=status
                ).observe(time.monotonic() - start)

        return wrapper

    return decorator


def record_token_usage(model_name: str, input_tokens: int, output_tokens: int) -> None:
    UPSTREAM_TOKENS_TOTAL.labels(model_name=model_name, direction="input").inc(
        input_tokens
    )
    UPSTREAM_TOKENS_TOTAL.labels(model_name=model_name, direction="output").inc(
        output_tokens
    )


def setup_metrics(
    app: FastAPI, config: MetricsConfig, tracing: TracingConfig
) -> None:
    """Attach HTTP instrumentation and the ``/metrics`` endpoint to *app*."""
    if not config.enabled:
        logger.info("Prometheus metrics disabled.")
        return

    Instrumentator(
        should_instrument_requests_inprogress=True,
        excluded_handlers=tracing.excluded_urls,
    ).instrument(app).expose(app, endpoint="/metrics")

    logger.info("Prometheus metrics initialised")
