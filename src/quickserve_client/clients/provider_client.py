from __future__ import annotations

from typing import Any, Mapping

from ..http_client import Payload
from .base import BaseClient


class ProviderClient(BaseClient):
    """Endpoints under ``/provider`` for the logged-in service provider."""

    def get_profile(self) -> Payload:
        return self._request("GET", "/provider/profile")

    def update_profile(self, data: Mapping[str, Any]) -> Payload:
        return self._request("PUT", "/provider/profile", json_body=dict(data))

    def update_availability(self, available: bool) -> Payload:
        return self._request("PATCH", "/provider/availability", json_body={"available": available})

    def get_stats(self) -> Payload:
        return self._request("GET", "/provider/stats")

    def get_services(self) -> Payload:
        return self._request("GET", "/provider/services")

    def create_service(self, data: Mapping[str, Any]) -> Payload:
        return self._request("POST", "/provider/services", json_body=dict(data))

    def update_service(self, service_id: int | str, data: Mapping[str, Any]) -> Payload:
        return self._request("PUT", f"/provider/services/{service_id}", json_body=dict(data))

    def delete_service(self, service_id: int | str) -> Payload:
        return self._request("DELETE", f"/provider/services/{service_id}")

    def toggle_service_status(self, service_id: int | str) -> Payload:
        return self._request("PATCH", f"/provider/services/{service_id}/toggle")

    def get_bookings(self) -> Payload:
        return self._request("GET", "/provider/bookings")

    def get_upcoming_bookings(self) -> Payload:
        return self._request("GET", "/provider/bookings/upcoming")

    def update_booking_status(self, booking_id: int | str, payload: Mapping[str, Any]) -> Payload:
        return self._request("PATCH", f"/provider/bookings/{booking_id}/status", json_body=dict(payload))
