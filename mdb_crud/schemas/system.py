"""
Bookkeeping sub-document embedded in every record.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class System(BaseModel):
    """Timestamps and soft-archive state, stored under ``system``."""

    model_config = ConfigDict(populate_by_name=True)

    created_at: datetime | None = Field(default=None, alias="createdAt")
    modified_at: datetime | None = Field(default=None, alias="modifiedAt")
    archived: bool | None = False
    archived_at: datetime | None = Field(default=None, alias="archivedAt")
