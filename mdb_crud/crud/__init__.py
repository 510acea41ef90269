"""
Generic CRUD layer.

Translates structured query arguments into aggregation pipelines for any
collection, with soft-archive semantics and reference population.
"""

from .conditions import prepare_condition
from .options import handle_generic_options, write_options
from .populate import populate
from .results import DeleteSummary, UpdateSummary
from .service import GenericCrudService

__all__ = [
    "GenericCrudService",
    "prepare_condition",
    "handle_generic_options",
    "write_options",
    "populate",
    "UpdateSummary",
    "DeleteSummary",
]
