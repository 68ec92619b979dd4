from __future__ import annotations

from typing import Any, Mapping

from ..http_client import Payload
from ..models import AdminListQuery, AnalyticsKind
from .base import BaseClient


def _list_params(query: AdminListQuery | Mapping[str, Any] | None) -> dict[str, Any]:
    if query is None:
        query = AdminListQuery()
    elif not isinstance(query, AdminListQuery):
        query = AdminListQuery.model_validate(dict(query))
    return query.to_params()


class AdminClient(BaseClient):
    """Endpoints under ``/admin``; list calls return Spring page envelopes."""

    def get_dashboard_stats(self) -> Payload:
        return self._request("GET", "/admin/dashboard")

    def get_users(self, query: AdminListQuery | Mapping[str, Any] | None = None) -> Payload:
        return self._request("GET", "/admin/users", params=_list_params(query))

    def get_user_by_id(self, user_id: int | str) -> Payload:
        return self._request("GET", f"/admin/users/{user_id}")

    def update_user_status(self, user_id: int | str, payload: Mapping[str, Any]) -> Payload:
        return self._request("PATCH", f"/admin/users/{user_id}/status", json_body=dict(payload))

    def delete_user(self, user_id: int | str) -> Payload:
        return self._request("DELETE", f"/admin/users/{user_id}")

    def get_providers(self, query: AdminListQuery | Mapping[str, Any] | None = None) -> Payload:
        return self._request("GET", "/admin/providers", params=_list_params(query))

    def get_provider_by_id(self, provider_id: int | str) -> Payload:
        return self._request("GET", f"/admin/providers/{provider_id}")

    def verify_provider(self, provider_id: int | str, payload: Mapping[str, Any]) -> Payload:
        return self._request("PATCH", f"/admin/providers/{provider_id}/verify", json_body=dict(payload))

    def update_provider_status(self, provider_id: int | str, payload: Mapping[str, Any]) -> Payload:
        return self._request("PATCH", f"/admin/providers/{provider_id}/status", json_body=dict(payload))

    def get_bookings(self, query: AdminListQuery | Mapping[str, Any] | None = None) -> Payload:
        return self._request("GET", "/admin/bookings", params=_list_params(query))

    def get_booking_by_id(self, booking_id: int | str) -> Payload:
        return self._request("GET", f"/admin/bookings/{booking_id}")

    def update_booking_status(self, booking_id: int | str, payload: Mapping[str, Any]) -> Payload:
        return self._request("PATCH", f"/admin/bookings/{booking_id}/status", json_body=dict(payload))

    def get_analytics(self, kind: AnalyticsKind | str, period: str = "month") -> Payload:
        kind = AnalyticsKind(kind)
        return self._request("GET", f"/admin/analytics/{kind.value}", params={"period": period})
