"""
MongoDB utility functions for MDB_CRUD.

Every record handed back by the CRUD layer goes through these helpers, so
callers only ever receive plain JSON-compatible data and never a live
driver object.
"""

from datetime import datetime
from typing import Any

from bson import ObjectId


def _clean_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _clean_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_clean_value(item) for item in value]
    return value


def clean_mongo_doc(doc: dict[str, Any] | None) -> dict[str, Any] | None:
    """
    Convert MongoDB document to JSON-serializable format.

    Recursively converts MongoDB-specific types to JSON-compatible types:
    - ObjectId -> str
    - datetime -> ISO format string
    - Nested dictionaries and lists are processed recursively

    The result is always a new structure; the input is left untouched.

    Args:
        doc: MongoDB document (dict) or None

    Returns:
        Cleaned document with all MongoDB types converted, or None if input was None

    Example:
        ```python
        doc = {
            "_id": ObjectId("507f1f77bcf86cd799439011"),
            "email": "john@example.com",
            "system": {"createdAt": datetime(2024, 1, 1, 12, 0, 0), "archived": False},
        }

        clean_mongo_doc(doc)
        # {
        #     "_id": "507f1f77bcf86cd799439011",
        #     "email": "john@example.com",
        #     "system": {"createdAt": "2024-01-01T12:00:00", "archived": False},
        # }
        ```
    """
    if doc is None:
        return None
    return _clean_value(doc)


def clean_mongo_docs(docs: list[dict[str, Any]] | None) -> list[dict[str, Any]]:
    """
    Convert a list of MongoDB documents to JSON-serializable format.

    Args:
        docs: List of MongoDB documents (None is treated as empty)

    Returns:
        List of cleaned documents
    """
    if not docs:
        return []
    return [clean_mongo_doc(doc) for doc in docs]


def get_path_values(doc: Any, path: str) -> list[Any]:
    """
    Collect every value found at a dotted ``path`` inside ``doc``.

    Lists met along the way are traversed element by element, the same way
    MongoDB resolves dotted paths through arrays.
    """
    head, _, rest = path.partition(".")
    if isinstance(doc, list):
        values: list[Any] = []
        for item in doc:
            values.extend(get_path_values(item, path))
        return values
    if not isinstance(doc, dict) or head not in doc:
        return []
    value = doc[head]
    if not rest:
        return [value]
    return get_path_values(value, rest)
