"""
Generic CRUD service.

``GenericCrudService`` is bound to one motor collection and, optionally, one
pydantic record schema. Entity services hold an instance of it and add their
own queries on top; the generic layer never needs to know the record shape.

All reads run as aggregation pipelines built in a fixed order::

    $match (archive filter + normalized conditions)
    $project (only when a projection is given)
    $sort / $skip / $limit (from options)
    $limit: 1 (single-result reads only, always last)

Records are soft-archived through ``system.archived``/``system.archivedAt``;
default reads hide archived records. Every record returned is a plain,
JSON-compatible copy of the stored document.

Usage:
    from mdb_crud.crud import GenericCrudService

    users = GenericCrudService(db["users"], User)
    user = await users.create(document={"email": "john@example.com"})
    active = await users.find(conditions={"email": "john@example.com"})
"""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pymongo.errors import PyMongoError

from ..constants import (
    ARCHIVED_AT_FIELD,
    ARCHIVED_FIELD,
    DELETE_OPTION_KEYS,
    FIND_ONE_LIMIT,
    MODIFIED_AT_FIELD,
    SEARCH_CLAUSE_KEYS,
    SEARCH_RESULT_LIMIT,
    SYSTEM_FIELD,
)
from ..exceptions import InvalidSearchRequestError
from ..observability.logging import get_logger, log_operation
from ..utils.mongo import clean_mongo_doc, clean_mongo_docs
from .conditions import prepare_condition
from .options import handle_generic_options, write_options
from .populate import populate as populate_references
from .results import DeleteSummary, UpdateSummary

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

Document = dict[str, Any]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _touches(update: dict[str, Any], path: str) -> bool:
    """True if any operator in ``update`` already writes ``path`` or its parent."""
    parent = path.split(".", 1)[0]
    for operator, fields in update.items():
        if operator == "$set" or not isinstance(fields, dict):
            continue
        if path in fields or parent in fields:
            return True
    return False


class GenericCrudService(Generic[T]):
    """
    Uniform data access for one collection.

    Args:
        collection: Motor collection (``AsyncIOMotorCollection``)
        record_type: Optional pydantic model; when given, ``create`` shapes
            incoming payloads through it (unknown fields dropped, aliases applied)
        timestamps: Maintain ``system.createdAt``/``system.modifiedAt`` on writes
    """

    def __init__(
        self,
        collection: Any,
        record_type: type[T] | None = None,
        timestamps: bool = True,
    ):
        self._collection = collection
        self._record_type = record_type
        self._timestamps = timestamps

    @property
    def collection(self) -> Any:
        return self._collection

    @property
    def collection_name(self) -> str:
        return getattr(self._collection, "name", type(self._collection).__name__)

    @property
    def record_type(self) -> type[T] | None:
        return self._record_type

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @contextmanager
    def _track(self, operation: str, **context: Any) -> Iterator[dict[str, Any]]:
        """
        Time an operation and log its outcome.

        Store errors are logged and re-raised unchanged. The yielded dict lets
        the caller add context (e.g. result counts) before the success log.
        """
        details: dict[str, Any] = {"collection": self.collection_name, **context}
        start = time.perf_counter()
        try:
            yield details
        except PyMongoError:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.exception(f"Database operation failed in {operation}")
            log_operation(
                logger,
                operation,
                level=logging.ERROR,
                success=False,
                duration_ms=duration_ms,
                **details,
            )
            raise
        duration_ms = (time.perf_counter() - start) * 1000
        log_operation(logger, operation, level=logging.DEBUG, duration_ms=duration_ms, **details)

    @staticmethod
    def _archive_filter(ignore_archived: bool = False) -> dict[str, Any]:
        if ignore_archived:
            return {}
        return {ARCHIVED_FIELD: {"$ne": True}}

    @staticmethod
    def _build_match(
        archive_filter: dict[str, Any], conditions: dict[str, Any] | None
    ) -> dict[str, Any]:
        # Caller conditions win over the archive filter on key collisions.
        return prepare_condition({**archive_filter, **(conditions or {})})

    @staticmethod
    def _build_pipeline(
        match: dict[str, Any],
        projection: dict[str, Any] | None,
        options: dict[str, Any] | None,
    ) -> list[dict[str, Any]]:
        pipeline: list[dict[str, Any]] = [{"$match": match}]
        if projection:
            pipeline.append({"$project": projection})
        pipeline.extend(handle_generic_options(options))
        return pipeline

    async def _aggregate(self, pipeline: list[dict[str, Any]]) -> list[Document]:
        cursor = self._collection.aggregate(pipeline)
        return await cursor.to_list(length=None)

    async def _populate(
        self, docs: list[Document], directives: list[dict[str, Any]] | None
    ) -> list[Document]:
        if not directives or not docs:
            return docs
        return await populate_references(self._collection.database, docs, directives)

    def _prepare_document(self, document: dict[str, Any] | None) -> Document:
        payload = dict(document or {})
        system = dict(payload.get(SYSTEM_FIELD) or {})
        for key in [k for k in payload if k.startswith(f"{SYSTEM_FIELD}.")]:
            system[key.split(".", 1)[1]] = payload.pop(key)
        if system:
            payload[SYSTEM_FIELD] = system

        if self._record_type is not None:
            shaped = self._record_type.model_validate(payload).model_dump(
                by_alias=True, exclude_none=True
            )
            # Record schemas describe fields, not identity; keep a caller-chosen _id.
            if payload.get("_id") is not None:
                shaped["_id"] = payload["_id"]
            payload = shaped
            system = dict(payload.get(SYSTEM_FIELD) or {})

        if system.get("archived") is None:
            system["archived"] = False

        if self._timestamps:
            now = _utcnow()
            system.setdefault("createdAt", now)
            system["modifiedAt"] = now

        payload[SYSTEM_FIELD] = system
        return payload

    def _prepare_changes(self, changes: Any) -> Any:
        """
        Turn caller changes into a driver update document.

        Plain field mappings are wrapped in ``$set``; operator documents pass
        through, with stray plain fields folded into their ``$set``. Pipeline
        updates (lists) get a trailing ``$set`` stage for the timestamp.
        """
        now = _utcnow()
        if isinstance(changes, list):
            if self._timestamps:
                return [*changes, {"$set": {MODIFIED_AT_FIELD: now}}]
            return list(changes)

        changes = dict(changes or {})
        update = {k: v for k, v in changes.items() if k.startswith("$")}
        plain = {k: v for k, v in changes.items() if not k.startswith("$")}
        if plain:
            update["$set"] = {**(update.get("$set") or {}), **plain}

        if not self._timestamps:
            return update

        set_fields = dict(update.get("$set") or {})
        if isinstance(set_fields.get(SYSTEM_FIELD), dict):
            set_fields[SYSTEM_FIELD] = {**set_fields[SYSTEM_FIELD], "modifiedAt": now}
        elif SYSTEM_FIELD not in set_fields and not _touches(update, MODIFIED_AT_FIELD):
            set_fields[MODIFIED_AT_FIELD] = now
        if set_fields:
            update["$set"] = set_fields
        return update

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create(
        self,
        *,
        document: dict[str, Any],
        projection: dict[str, Any] | None = None,
        populate: list[dict[str, Any]] | None = None,
        options: dict[str, Any] | None = None,
        ignore_archived: bool = False,
    ) -> Document | None:
        """
        Insert a record and return it as read back through ``find_one``.

        ``system.archived`` defaults to ``False`` when the payload leaves it
        unset. Returns None only if the read-back finds nothing.
        """
        payload = self._prepare_document(document)
        with self._track("create") as details:
            result = await self._collection.insert_one(payload)
            details["inserted_id"] = str(result.inserted_id)

        return await self.find_one(
            conditions={"_id": result.inserted_id},
            projection=projection,
            populate=populate,
            options=options,
            ignore_archived=ignore_archived,
        )

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def find_one(
        self,
        *,
        conditions: dict[str, Any] | None = None,
        projection: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
        populate: list[dict[str, Any]] | None = None,
        ignore_archived: bool = False,
    ) -> Document | None:
        """
        Return the first record matching ``conditions``, or None.

        A ``$limit: 1`` stage is always appended after any caller options,
        so a caller-supplied limit cannot widen the result.

        Args:
            conditions: MongoDB-style filter
            projection: Field inclusion/exclusion mapping; empty means all fields
            options: ``sort``/``skip``/``limit``
            populate: Population directives resolved on the result
            ignore_archived: Include archived records

        Returns:
            Serialized record or None
        """
        pipeline = self._build_pipeline(
            self._build_match(self._archive_filter(ignore_archived), conditions),
            projection,
            options,
        )
        pipeline.append({"$limit": FIND_ONE_LIMIT})

        with self._track("find_one") as details:
            docs = await self._aggregate(pipeline)
            docs = await self._populate(docs, populate)
            details["found"] = bool(docs)

        return clean_mongo_doc(docs[0]) if docs else None

    async def find(
        self,
        *,
        conditions: dict[str, Any] | None = None,
        projection: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
        populate: list[dict[str, Any]] | None = None,
        ignore_archived: bool = False,
    ) -> list[Document]:
        """
        Return every record matching ``conditions``.

        Same pipeline as ``find_one`` without the terminal limit; result size
        is governed by ``options["limit"]`` alone. Never returns None.
        """
        pipeline = self._build_pipeline(
            self._build_match(self._archive_filter(ignore_archived), conditions),
            projection,
            options,
        )

        with self._track("find") as details:
            docs = await self._aggregate(pipeline)
            docs = await self._populate(docs, populate)
            details["count"] = len(docs)

        return clean_mongo_docs(docs)

    async def find_archived(
        self,
        *,
        conditions: dict[str, Any] | None = None,
        projection: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
        populate: list[dict[str, Any]] | None = None,
    ) -> list[Document]:
        """Like ``find``, restricted to archived records."""
        # The archive flag is applied last so conditions cannot widen the view.
        pipeline = self._build_pipeline(
            prepare_condition({**(conditions or {}), ARCHIVED_FIELD: True}),
            projection,
            options,
        )

        with self._track("find_archived") as details:
            docs = await self._aggregate(pipeline)
            docs = await self._populate(docs, populate)
            details["count"] = len(docs)

        return clean_mongo_docs(docs)

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    async def find_one_and_update(
        self,
        *,
        conditions: dict[str, Any],
        changes: Any,
        projection: dict[str, Any] | None = None,
        populate: list[dict[str, Any]] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Document | None:
        """
        Update the first active record matching ``conditions`` and return it.

        Archived records are never targeted. The filter is normalized once
        and the same filter drives both the write and the read-back.
        """
        match = self._build_match(self._archive_filter(), conditions)
        options = dict(options or {})

        with self._track("find_one_and_update") as details:
            result = await self._collection.update_one(
                match, self._prepare_changes(changes), **write_options(options)
            )
            details["matched_count"] = getattr(result, "matched_count", None)

        return await self.find_one(
            conditions=match,
            projection=projection,
            populate=populate,
            options=options,
        )

    async def update_one(
        self,
        *,
        conditions: dict[str, Any],
        changes: Any,
        projection: dict[str, Any] | None = None,
        populate: list[dict[str, Any]] | None = None,
        options: dict[str, Any] | None = None,
        ignore_archived: bool = False,
    ) -> Document | None:
        """
        Update one record and return its state as read back by ``find_one``.

        Args:
            conditions: MongoDB-style filter
            changes: Field mapping (wrapped in ``$set``), operator document or
                update pipeline
            projection: Projection applied to the returned record
            populate: Population directives applied to the returned record
            options: Write options (``upsert``, ...) and read-back options
            ignore_archived: Allow archived records to be updated and returned

        Returns:
            Serialized record, or None when nothing matches after the update
        """
        match = self._build_match(self._archive_filter(ignore_archived), conditions)
        options = {**(options or {}), "new": True}

        with self._track("update_one") as details:
            result = await self._collection.update_one(
                match, self._prepare_changes(changes), **write_options(options)
            )
            details["matched_count"] = getattr(result, "matched_count", None)

        return await self.find_one(
            conditions=match,
            projection=projection,
            populate=populate,
            options=options,
            ignore_archived=ignore_archived,
        )

    async def update_many(
        self,
        *,
        conditions: dict[str, Any],
        changes: Any,
        options: dict[str, Any] | None = None,
        ignore_archived: bool = False,
    ) -> UpdateSummary:
        """Update every matching record and return match/modify counts."""
        match = self._build_match(self._archive_filter(ignore_archived), conditions)
        options = {**(options or {}), "new": True}

        with self._track("update_many") as details:
            result = await self._collection.update_many(
                match, self._prepare_changes(changes), **write_options(options)
            )
            summary = UpdateSummary.from_result(result)
            details["modified_count"] = summary.modified_count

        return summary

    # ------------------------------------------------------------------
    # Delete (permanent, archive state is ignored)
    # ------------------------------------------------------------------

    async def delete_one(
        self,
        *,
        conditions: dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> Document | None:
        """Permanently remove one matching record and return its last state."""
        kwargs = write_options(options, DELETE_OPTION_KEYS)
        sort = (options or {}).get("sort")
        if sort:
            kwargs["sort"] = list(sort.items()) if isinstance(sort, dict) else sort

        with self._track("delete_one") as details:
            doc = await self._collection.find_one_and_delete(
                prepare_condition(conditions), **kwargs
            )
            details["deleted"] = doc is not None

        return clean_mongo_doc(doc)

    async def delete(
        self,
        *,
        conditions: dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> DeleteSummary:
        """Permanently remove every matching record."""
        with self._track("delete") as details:
            result = await self._collection.delete_many(
                prepare_condition(conditions), **write_options(options, DELETE_OPTION_KEYS)
            )
            summary = DeleteSummary.from_result(result)
            details["deleted_count"] = summary.deleted_count

        return summary

    # ------------------------------------------------------------------
    # Archive
    # ------------------------------------------------------------------

    async def _set_archive_state(
        self,
        operation: str,
        conditions: dict[str, Any],
        archived: bool,
        many: bool,
        options: dict[str, Any] | None,
    ) -> UpdateSummary:
        changes = {
            "$set": {
                ARCHIVED_FIELD: archived,
                ARCHIVED_AT_FIELD: _utcnow() if archived else None,
            }
        }
        update = self._collection.update_many if many else self._collection.update_one
        with self._track(operation) as details:
            result = await update(
                prepare_condition(conditions),
                self._prepare_changes(changes),
                **write_options(options),
            )
            summary = UpdateSummary.from_result(result)
            details["modified_count"] = summary.modified_count

        return summary

    async def archive_one(
        self, *, conditions: dict[str, Any], options: dict[str, Any] | None = None
    ) -> UpdateSummary:
        """Soft-archive the first matching record (already archived ones included)."""
        return await self._set_archive_state("archive_one", conditions, True, False, options)

    async def archive_many(
        self, *, conditions: dict[str, Any], options: dict[str, Any] | None = None
    ) -> UpdateSummary:
        """Soft-archive every matching record."""
        return await self._set_archive_state("archive_many", conditions, True, True, options)

    async def unarchive_one(
        self, *, conditions: dict[str, Any], options: dict[str, Any] | None = None
    ) -> UpdateSummary:
        """Restore the first matching record and clear its archive date."""
        return await self._set_archive_state("unarchive_one", conditions, False, False, options)

    async def unarchive_many(
        self, *, conditions: dict[str, Any], options: dict[str, Any] | None = None
    ) -> UpdateSummary:
        """Restore every matching record and clear their archive dates."""
        return await self._set_archive_state("unarchive_many", conditions, False, True, options)

    # ------------------------------------------------------------------
    # Atlas Search
    # ------------------------------------------------------------------

    @staticmethod
    def build_search_stage(
        must: list[Any] | None = None,
        should: list[Any] | None = None,
        must_not: list[Any] | None = None,
        filter: list[Any] | None = None,
        index: str | None = None,
    ) -> dict[str, Any]:
        """
        Build the ``$search`` stage for the given clause groups.

        A single group is used as-is; two or more are wrapped in ``compound``.

        Raises:
            InvalidSearchRequestError: If no clause group is given
        """
        groups = {"filter": filter, "must": must, "mustNot": must_not, "should": should}
        query = {key: groups[key] for key in SEARCH_CLAUSE_KEYS if groups[key] is not None}

        if not query:
            raise InvalidSearchRequestError(
                "Search requires at least one of must, should, must_not or filter",
                clause_keys=list(SEARCH_CLAUSE_KEYS),
            )

        if len(query) > 1:
            query = {"compound": query}
        if index:
            query = {"index": index, **query}
        return {"$search": query}

    async def generic_search(
        self,
        *,
        must: list[Any] | None = None,
        should: list[Any] | None = None,
        must_not: list[Any] | None = None,
        filter: list[Any] | None = None,
        populate: list[dict[str, Any]] | None = None,
        projection: dict[str, Any] | None = None,
        additional_stage: dict[str, Any] | None = None,
        index: str | None = None,
    ) -> list[Document]:
        """
        Run an Atlas Search query and return at most 30 records.

        Pipeline: ``$search``, ``additional_stage`` (if any), ``$limit: 30``,
        ``$project`` (if any). The cap is fixed and cannot be raised.

        Raises:
            InvalidSearchRequestError: If no clause group is given
        """
        try:
            pipeline = [self.build_search_stage(must, should, must_not, filter, index)]
        except InvalidSearchRequestError as e:
            e.collection_name = self.collection_name
            e.context["collection"] = self.collection_name
            raise

        if additional_stage:
            pipeline.append(dict(additional_stage))
        pipeline.append({"$limit": SEARCH_RESULT_LIMIT})
        if projection:
            pipeline.append({"$project": projection})

        with self._track("generic_search") as details:
            docs = await self._aggregate(pipeline)
            docs = await self._populate(docs, populate)
            details["count"] = len(docs)

        return clean_mongo_docs(docs)
