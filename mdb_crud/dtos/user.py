"""
Request bodies for the user routes.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class BaseUserDto(BaseModel):
    """Fields a client may send for a user; all optional."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    first_name: str | None = Field(default=None, alias="firstName", examples=["Ada"])
    last_name: str | None = Field(default=None, alias="lastName", examples=["Lovelace"])
    email: EmailStr | None = Field(default=None, examples=["ada@example.com"])

    def to_changes(self) -> dict[str, Any]:
        """Stored field names of the values the client actually sent."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class UpdateUserDto(BaseUserDto):
    """Body of ``PUT /users/me``."""
