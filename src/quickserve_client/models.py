from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @classmethod
    def _missing_(cls, value: object) -> "BookingStatus | None":
        if isinstance(value, str):
            normalized = value.strip().upper()
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    @property
    def is_terminal(self) -> bool:
        return self in {BookingStatus.COMPLETED, BookingStatus.CANCELLED}


class Role(str, Enum):
    CUSTOMER = "CUSTOMER"
    SERVICE_PROVIDER = "SERVICE_PROVIDER"
    ADMIN = "ADMIN"


class AccountStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    PENDING_VERIFICATION = "PENDING_VERIFICATION"


class AnalyticsKind(str, Enum):
    REVENUE = "revenue"
    BOOKINGS = "bookings"
    USERS = "users"


def is_terminal_status(value: object) -> bool:
    """True for completed/cancelled bookings, whatever the casing of ``value``."""
    try:
        return BookingStatus(value).is_terminal
    except ValueError:
        return False


class AuthPayload(BaseModel):
    """``data`` block of the login, signup and refresh responses."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    access_token: str = Field(alias="accessToken")
    refresh_token: str | None = Field(default=None, alias="refreshToken")
    token_type: str = Field(default="Bearer", alias="tokenType")
    expires_in: int | None = Field(default=None, alias="expiresIn")
    user: dict[str, Any] | None = None


class PersistedAuth(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user: dict[str, Any] | None = None
    access_token: str | None = Field(default=None, alias="accessToken")
    refresh_token: str | None = Field(default=None, alias="refreshToken")
    is_authenticated: bool = Field(default=False, alias="isAuthenticated")


class Pagination(BaseModel):
    page: int = 0
    total_pages: int = 0
    total_elements: int = 0

    @classmethod
    def from_page(cls, data: Mapping[str, Any] | None) -> "Pagination":
        data = data or {}
        return cls(
            page=data.get("number") or data.get("page") or 0,
            total_pages=data.get("totalPages") or 0,
            total_elements=data.get("totalElements") or 0,
        )


class _QueryModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("*", mode="before")
    @classmethod
    def _enum_to_value(cls, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value

    def to_params(self) -> dict[str, Any]:
        params = self.model_dump(by_alias=True, exclude_none=True)
        return {key: (str(value).lower() if isinstance(value, bool) else value) for key, value in params.items()}


class ProviderSearchQuery(_QueryModel):
    category: str | None = None
    city: str | None = None
    search: str | None = None
    min_price: float | None = Field(default=None, alias="minPrice")
    max_price: float | None = Field(default=None, alias="maxPrice")
    min_rating: float | None = Field(default=None, alias="minRating")
    sort_by: str | None = Field(default=None, alias="sortBy")
    page: int | None = None
    size: int | None = None


class AdminListQuery(_QueryModel):
    page: int = 0
    size: int = 20
    search: str | None = None
    status: str | None = None
    role: str | None = None
    verified: bool | None = None
