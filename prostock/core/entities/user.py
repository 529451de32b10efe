"""User and audit log entities."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class UserRole(str, Enum):
    """Access level."""

    ADMIN = "ADMIN"
    STAFF = "STAFF"


class User(BaseModel):
    """Backend user account."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    username: str
    name: str = ""
    role: UserRole = UserRole.STAFF
    password: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        return "" if v is None else str(v)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def without_secret(self) -> "User":
        """Copy safe to persist on the client."""
        return self.model_copy(update={"password": None})


class ActivityLog(BaseModel):
    """Backend audit trail entry."""

    timestamp: str = ""
    user: str = ""
    action: str = ""
    details: str = ""
