"""
MDB_CRUD - generic document CRUD over MongoDB.

A reusable data-access layer that turns structured query arguments into
aggregation pipelines for any collection, plus a thin FastAPI surface.
"""

from .config import Settings
from .crud import (
    DeleteSummary,
    GenericCrudService,
    UpdateSummary,
    handle_generic_options,
    prepare_condition,
)
from .exceptions import ConfigurationError, InvalidSearchRequestError, MongoCrudError

__version__ = "0.1.0"

__all__ = [
    # Core
    "GenericCrudService",
    "prepare_condition",
    "handle_generic_options",
    "UpdateSummary",
    "DeleteSummary",
    # Configuration
    "Settings",
    # Errors
    "MongoCrudError",
    "ConfigurationError",
    "InvalidSearchRequestError",
]
