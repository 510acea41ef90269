"""
Observability for MDB_CRUD: contextual logging and health checks.
"""

from .health import HealthCheckResult, HealthStatus, check_mongodb_health
from .logging import (
    ContextualLoggerAdapter,
    clear_correlation_id,
    clear_crud_context,
    get_correlation_id,
    get_logger,
    get_logging_context,
    log_operation,
    set_correlation_id,
    set_crud_context,
)

__all__ = [
    "HealthStatus",
    "HealthCheckResult",
    "check_mongodb_health",
    "ContextualLoggerAdapter",
    "get_logger",
    "get_logging_context",
    "log_operation",
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    "set_crud_context",
    "clear_crud_context",
]
