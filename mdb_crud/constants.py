"""
Constants for MDB_CRUD.

This module contains all shared constants used across the codebase to avoid
magic numbers and improve maintainability.
"""

from typing import Final

# ============================================================================
# SYSTEM SUB-DOCUMENT CONSTANTS
# ============================================================================

SYSTEM_FIELD: Final[str] = "system"
"""Name of the embedded bookkeeping sub-document carried by every record."""

ARCHIVED_FIELD: Final[str] = "system.archived"
"""Dotted path of the soft-archive flag."""

ARCHIVED_AT_FIELD: Final[str] = "system.archivedAt"
"""Dotted path of the soft-archive timestamp."""

CREATED_AT_FIELD: Final[str] = "system.createdAt"
"""Dotted path of the creation timestamp."""

MODIFIED_AT_FIELD: Final[str] = "system.modifiedAt"
"""Dotted path of the last-modification timestamp."""

# ============================================================================
# QUERY CONSTANTS
# ============================================================================

FIND_ONE_LIMIT: Final[int] = 1
"""Terminal limit appended to every single-result pipeline."""

SEARCH_RESULT_LIMIT: Final[int] = 30
"""Hard cap on the number of documents returned by a search pipeline."""

OBJECT_ID_HEX_LENGTH: Final[int] = 24
"""Length of the hexadecimal text form of an ObjectId."""

SEARCH_CLAUSE_KEYS: Final[tuple[str, ...]] = ("filter", "must", "mustNot", "should")
"""Clause groups accepted by a compound Atlas Search query, in build order."""

# Options that the driver accepts on write calls. Pipeline-shaping options
# (sort/skip/limit) and informational flags such as "new" are never forwarded.
WRITE_OPTION_KEYS: Final[tuple[str, ...]] = (
    "upsert",
    "array_filters",
    "bypass_document_validation",
    "collation",
    "hint",
    "let",
    "comment",
)
"""Option keys forwarded to motor write methods."""

DELETE_OPTION_KEYS: Final[tuple[str, ...]] = ("collation", "hint", "let", "comment")
"""Option keys forwarded to motor delete methods."""

# ============================================================================
# DATABASE CONSTANTS
# ============================================================================

# Connection pool defaults
DEFAULT_MAX_POOL_SIZE: Final[int] = 50
"""Default maximum MongoDB connection pool size."""

DEFAULT_MIN_POOL_SIZE: Final[int] = 10
"""Default minimum MongoDB connection pool size."""

DEFAULT_SERVER_SELECTION_TIMEOUT_MS: Final[int] = 5000
"""Default server selection timeout in milliseconds."""

DEFAULT_MAX_IDLE_TIME_MS: Final[int] = 45000
"""Default maximum idle time before closing connections (milliseconds)."""

# ============================================================================
# APPLICATION CONSTANTS
# ============================================================================

ENV_DEVELOPMENT: Final[str] = "development"
ENV_PRODUCTION: Final[str] = "production"

SUPPORTED_ENVIRONMENTS: Final[tuple[str, ...]] = (ENV_DEVELOPMENT, ENV_PRODUCTION)

DEFAULT_PORT: Final[int] = 3000
"""Default HTTP port."""

DEFAULT_API_PREFIX: Final[str] = "/api"
"""Global route prefix."""

CORRELATION_ID_HEADER: Final[str] = "X-Correlation-ID"
"""Request/response header carrying the correlation ID."""

HIDDEN_VALIDATION_MESSAGE: Final[str] = "Error messages are in production disabled!"
"""Placeholder returned instead of validation details when they are suppressed."""
