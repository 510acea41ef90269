"""
Plain summaries of bulk write results.

The driver's ``UpdateResult``/``DeleteResult`` objects are not serializable;
bulk operations return these dataclasses instead.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class UpdateSummary:
    """Outcome of an update/archive call."""

    matched_count: int = 0
    modified_count: int = 0
    upserted_id: str | None = None
    acknowledged: bool = True

    @classmethod
    def from_result(cls, result: Any) -> "UpdateSummary":
        if result is None:
            return cls(acknowledged=False)
        upserted_id = getattr(result, "upserted_id", None)
        return cls(
            matched_count=getattr(result, "matched_count", 0) or 0,
            modified_count=getattr(result, "modified_count", 0) or 0,
            upserted_id=str(upserted_id) if upserted_id is not None else None,
            acknowledged=bool(getattr(result, "acknowledged", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DeleteSummary:
    """Outcome of a bulk delete."""

    deleted_count: int = 0
    acknowledged: bool = True

    @classmethod
    def from_result(cls, result: Any) -> "DeleteSummary":
        if result is None:
            return cls(acknowledged=False)
        return cls(
            deleted_count=getattr(result, "deleted_count", 0) or 0,
            acknowledged=bool(getattr(result, "acknowledged", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
