# ABOUTME: Logging configuration and structured logger helpers
# ABOUTME: loguru owns the sinks, structlog renders the events emitted by the pipeline

from .config import LoggingMode, configure_logging, detect_logging_mode, get_logging_status
from .utils import LogContext, get_logger, with_operation_context, with_pipeline_context

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "detect_logging_mode",
    "get_logging_status",
    # Utilities
    "LogContext",
    "get_logger",
    "with_operation_context",
    "with_pipeline_context",
]
