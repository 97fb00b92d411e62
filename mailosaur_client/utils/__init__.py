"""Utility modules."""

from mailosaur_client.utils.callbacks import with_callback
from mailosaur_client.utils.logger import get_logger
from mailosaur_client.utils.tracing import get_tracer, init_tracing, shutdown_tracing

__all__ = [
    "with_callback",
    "get_logger",
    "get_tracer",
    "init_tracing",
    "shutdown_tracing",
]
