"""
Query condition normalization.

Request payloads carry identifiers as 24-character hex strings; MongoDB
stores them as ``ObjectId``. ``prepare_condition`` walks a filter of any
depth and converts every identifier-shaped value, without interpreting
operator keys, so ``{"_id": "..."}``, ``{"_id": {"$ne": "..."}}`` and
``{"_id": {"$in": ["...", "..."]}}`` are all handled the same way.
"""

from typing import Any

from bson import ObjectId

from ..constants import OBJECT_ID_HEX_LENGTH


def _to_object_id(value: Any) -> Any:
    if value is None:
        return value
    if len(str(value)) == OBJECT_ID_HEX_LENGTH and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def _normalize(value: Any) -> Any:
    if isinstance(value, dict):
        return prepare_condition(value)
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    return _to_object_id(value)


def prepare_condition(condition: dict[str, Any] | None) -> dict[str, Any]:
    """
    Return a copy of ``condition`` with identifier strings cast to ``ObjectId``.

    Args:
        condition: MongoDB-style filter; may nest mappings and lists arbitrarily

    Returns:
        New filter dictionary; the input is not modified

    Example:
        prepare_condition({"_id": "507f1f77bcf86cd799439011", "email": "a@x.com"})
        # {"_id": ObjectId("507f1f77bcf86cd799439011"), "email": "a@x.com"}
    """
    if not condition:
        return {}
    return {key: _normalize(value) for key, value in condition.items()}
