from __future__ import annotations

from typing import Any, Callable

from ..clients.admin_client import AdminClient
from ..models import AccountStatus, AdminListQuery, AnalyticsKind, BookingStatus, Pagination
from .base import BaseState, compact, plain, remove_by_id, replace_by_id

DEFAULT_PAGE_SIZE = 20
LIST_KINDS = ("users", "providers", "bookings")


class AdminState(BaseState):
    """Admin management views.

    Users, providers and bookings are paged lists with independent cursors,
    filters and loading flags. Single-entity reads and mutations share
    ``is_loading``.
    """

    name = "admin"

    def __init__(self, client: AdminClient) -> None:
        self.client = client
        self.clear_data()

    def initial_state(self) -> dict[str, Any]:
        state: dict[str, Any] = {
            "dashboard_stats": None,
            "analytics": {},
            "selected_user": None,
            "selected_provider": None,
            "selected_booking": None,
            "is_loading": False,
            "error": None,
        }
        for kind in LIST_KINDS:
            state[kind] = []
            state[f"{kind}_pagination"] = Pagination()
            state[f"{kind}_filters"] = {"size": DEFAULT_PAGE_SIZE}
            state[f"is_loading_{kind}"] = False
        return state

    # dashboard

    def fetch_dashboard_stats(self) -> Any:
        return self._run(
            "fetch_dashboard_stats",
            self.client.get_dashboard_stats,
            fallback="Failed to fetch dashboard stats",
            apply=lambda data: setattr(self, "dashboard_stats", data),
        )

    def fetch_analytics(self, kind: AnalyticsKind | str, period: str = "month") -> Any:
        kind = AnalyticsKind(kind)
        return self._run(
            "fetch_analytics",
            lambda: self.client.get_analytics(kind, period),
            fallback=f"Failed to fetch {kind.value} analytics",
            apply=lambda data: setattr(self, "analytics", {**self.analytics, kind.value: data}),
        )

    # paged lists

    def _fetch_page(self, kind: str, call: Callable[[AdminListQuery], Any], query: dict[str, Any]) -> Any:
        params = AdminListQuery.model_validate(query)

        def apply(data: Any) -> None:
            data = data or {}
            setattr(self, kind, data.get("content") or [])
            setattr(self, f"{kind}_pagination", Pagination.from_page(data))

        return self._run(
            f"fetch_{kind}",
            lambda: call(params),
            fallback=f"Failed to fetch {kind}",
            loading=f"is_loading_{kind}",
            apply=apply,
        )

    def _set_filter(self, kind: str, fetch: Callable[..., Any], filters: dict[str, Any]) -> Any:
        current = getattr(self, f"{kind}_filters")
        # a filter change always starts again from the first page
        filters.pop("page", None)
        updated = {"size": filters.pop("size", current.get("size", DEFAULT_PAGE_SIZE))}
        updated.update({key: plain(value) for key, value in filters.items() if value is not None})
        setattr(self, f"{kind}_filters", updated)
        return fetch(page=0, **updated)

    def fetch_users(self, **query: Any) -> Any:
        return self._fetch_page("users", self.client.get_users, query)

    def set_users_filter(self, **filters: Any) -> Any:
        return self._set_filter("users", self.fetch_users, filters)

    def go_to_users_page(self, page: int) -> Any:
        return self.fetch_users(page=page, **self.users_filters)

    def fetch_providers(self, **query: Any) -> Any:
        return self._fetch_page("providers", self.client.get_providers, query)

    def set_providers_filter(self, **filters: Any) -> Any:
        return self._set_filter("providers", self.fetch_providers, filters)

    def go_to_providers_page(self, page: int) -> Any:
        return self.fetch_providers(page=page, **self.providers_filters)

    def fetch_bookings(self, **query: Any) -> Any:
        return self._fetch_page("bookings", self.client.get_bookings, query)

    def set_bookings_filter(self, **filters: Any) -> Any:
        return self._set_filter("bookings", self.fetch_bookings, filters)

    def go_to_bookings_page(self, page: int) -> Any:
        return self.fetch_bookings(page=page, **self.bookings_filters)

    # users

    def fetch_user_by_id(self, user_id: int | str) -> Any:
        return self._run(
            "fetch_user_by_id",
            lambda: self.client.get_user_by_id(user_id),
            fallback="Failed to fetch user",
            apply=lambda data: setattr(self, "selected_user", data),
        )

    def update_user_status(self, user_id: int | str, status: AccountStatus | str, reason: str | None = None) -> Any:
        def apply(updated: Any) -> None:
            self.users = replace_by_id(self.users, user_id, updated)
            self.selected_user = updated

        return self._run(
            "update_user_status",
            lambda: self.client.update_user_status(user_id, compact({"status": plain(status), "reason": reason})),
            fallback="Failed to update user status",
            apply=apply,
        )

    def delete_user(self, user_id: int | str) -> Any:
        return self._run(
            "delete_user",
            lambda: self.client.delete_user(user_id),
            fallback="Failed to delete user",
            apply=lambda _: setattr(self, "users", remove_by_id(self.users, user_id)),
        )

    # providers

    def fetch_provider_by_id(self, provider_id: int | str) -> Any:
        return self._run(
            "fetch_provider_by_id",
            lambda: self.client.get_provider_by_id(provider_id),
            fallback="Failed to fetch provider",
            apply=lambda data: setattr(self, "selected_provider", data),
        )

    def _apply_provider(self, provider_id: int | str) -> Callable[[Any], None]:
        def apply(updated: Any) -> None:
            self.providers = replace_by_id(self.providers, provider_id, updated)
            self.selected_provider = updated

        return apply

    def verify_provider(self, provider_id: int | str, verified: bool, notes: str | None = None) -> Any:
        return self._run(
            "verify_provider",
            lambda: self.client.verify_provider(provider_id, compact({"verified": verified, "notes": notes})),
            fallback="Failed to verify provider",
            apply=self._apply_provider(provider_id),
        )

    def update_provider_status(
        self,
        provider_id: int | str,
        status: AccountStatus | str,
        reason: str | None = None,
    ) -> Any:
        return self._run(
            "update_provider_status",
            lambda: self.client.update_provider_status(
                provider_id, compact({"status": plain(status), "reason": reason})
            ),
            fallback="Failed to update provider status",
            apply=self._apply_provider(provider_id),
        )

    # bookings

    def fetch_booking_by_id(self, booking_id: int | str) -> Any:
        return self._run(
            "fetch_booking_by_id",
            lambda: self.client.get_booking_by_id(booking_id),
            fallback="Failed to fetch booking",
            apply=lambda data: setattr(self, "selected_booking", data),
        )

    def update_booking_status(
        self,
        booking_id: int | str,
        status: BookingStatus | str,
        notes: str | None = None,
    ) -> Any:
        def apply(updated: Any) -> None:
            self.bookings = replace_by_id(self.bookings, booking_id, updated)
            self.selected_booking = updated

        return self._run(
            "update_booking_status",
            lambda: self.client.update_booking_status(booking_id, compact({"status": plain(status), "notes": notes})),
            fallback="Failed to update booking status",
            apply=apply,
        )

    def clear_selected_user(self) -> None:
        self.selected_user = None

    def clear_selected_provider(self) -> None:
        self.selected_provider = None

    def clear_selected_booking(self) -> None:
        self.selected_booking = None
