"""
Reference population for aggregation results.

A population directive names a reference field and the collection it points
into; the populator fetches the referenced documents in one ``$in`` query per
directive and replaces the stored identifiers with the documents themselves.

Directive shape::

    {
        "path": "studios",            # dotted path, may traverse arrays
        "collection": "studios",      # referenced collection name
        "select": {"name": 1},        # optional projection
        "populate": [...],            # optional nested directives
    }

A single reference with no matching document becomes ``None``; missing
entries inside a list of references are dropped.
"""

import logging
from typing import Any

from .conditions import prepare_condition
from ..utils.mongo import get_path_values

logger = logging.getLogger(__name__)


def _flatten_ids(values: list[Any]) -> list[Any]:
    ids: list[Any] = []
    for value in values:
        if isinstance(value, list):
            ids.extend(v for v in value if v is not None and not isinstance(v, dict))
        elif value is not None and not isinstance(value, dict):
            ids.append(value)
    return ids


def _replace_at_path(doc: Any, path: str, lookup: dict[str, dict[str, Any]]) -> None:
    if isinstance(doc, list):
        for item in doc:
            _replace_at_path(item, path, lookup)
        return
    if not isinstance(doc, dict):
        return

    head, _, rest = path.partition(".")
    if head not in doc:
        return
    if rest:
        _replace_at_path(doc[head], rest, lookup)
        return

    value = doc[head]
    if isinstance(value, list):
        doc[head] = [
            v if isinstance(v, dict) else lookup[str(v)]
            for v in value
            if isinstance(v, dict) or str(v) in lookup
        ]
    elif value is not None and not isinstance(value, dict):
        doc[head] = lookup.get(str(value))


def _validate_directive(directive: dict[str, Any]) -> None:
    if not isinstance(directive, dict):
        raise TypeError(f"Population directive must be a mapping, got {type(directive).__name__}")
    if not directive.get("path"):
        raise ValueError("Population directive requires a 'path'")
    if not directive.get("collection"):
        raise ValueError(f"Population directive for '{directive['path']}' requires a 'collection'")


async def populate(
    database: Any,
    docs: list[dict[str, Any]],
    directives: list[dict[str, Any]] | None,
) -> list[dict[str, Any]]:
    """
    Resolve reference fields of ``docs`` in place.

    Args:
        database: Motor database the referenced collections live in
        docs: Raw documents returned by the driver
        directives: Ordered population directives

    Returns:
        The same list, with references replaced by documents

    Raises:
        ValueError/TypeError: If a directive is malformed
        PyMongoError: Store failures propagate unchanged
    """
    if not docs or not directives:
        return docs

    for directive in directives:
        _validate_directive(directive)
        path = directive["path"]

        ids = _flatten_ids(get_path_values(docs, path))
        if not ids:
            continue

        query = prepare_condition({"_id": {"$in": ids}})
        projection = directive.get("select") or None
        cursor = database[directive["collection"]].find(query, projection)
        referenced = await cursor.to_list(length=None)

        if directive.get("populate"):
            referenced = await populate(database, referenced, directive["populate"])

        lookup = {str(ref["_id"]): ref for ref in referenced if "_id" in ref}
        logger.debug(
            f"Populated '{path}' from '{directive['collection']}': "
            f"{len(lookup)}/{len(set(map(str, ids)))} references resolved"
        )
        _replace_at_path(docs, path, lookup)

    return docs
