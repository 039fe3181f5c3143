"""Process-level infrastructure: logging, tracing, caching helpers."""

from .singleton import singleton  # noqa: F401
