from __future__ import annotations

from typing import Any, Mapping

from ..http_client import Payload
from .base import BaseClient


class CustomerClient(BaseClient):
    """Endpoints under ``/customer`` for the logged-in customer."""

    def get_profile(self) -> Payload:
        return self._request("GET", "/customer/profile")

    def update_profile(self, data: Mapping[str, Any]) -> Payload:
        return self._request("PUT", "/customer/profile", json_body=dict(data))

    # bookings

    def create_booking(self, data: Mapping[str, Any]) -> Payload:
        return self._request("POST", "/customer/bookings", json_body=dict(data))

    def get_bookings(self) -> Payload:
        return self._request("GET", "/customer/bookings")

    def get_upcoming_bookings(self) -> Payload:
        return self._request("GET", "/customer/bookings/upcoming")

    def get_past_bookings(self) -> Payload:
        return self._request("GET", "/customer/bookings/past")

    def get_booking(self, booking_id: int | str) -> Payload:
        return self._request("GET", f"/customer/bookings/{booking_id}")

    def cancel_booking(self, booking_id: int | str, reason: str | None = None) -> Payload:
        body = {"reason": reason} if reason else {}
        return self._request("POST", f"/customer/bookings/{booking_id}/cancel", json_body=body)

    # reviews

    def create_review(self, data: Mapping[str, Any]) -> Payload:
        return self._request("POST", "/customer/reviews", json_body=dict(data))

    def get_my_reviews(self) -> Payload:
        return self._request("GET", "/customer/reviews")

    # saved addresses

    def get_saved_addresses(self) -> Payload:
        return self._request("GET", "/customer/addresses")

    def add_saved_address(self, data: Mapping[str, Any]) -> Payload:
        return self._request("POST", "/customer/addresses", json_body=dict(data))

    def update_saved_address(self, address_id: int | str, data: Mapping[str, Any]) -> Payload:
        return self._request("PUT", f"/customer/addresses/{address_id}", json_body=dict(data))

    def delete_saved_address(self, address_id: int | str) -> Payload:
        return self._request("DELETE", f"/customer/addresses/{address_id}")

    def set_default_address(self, address_id: int | str) -> Payload:
        return self._request("PATCH", f"/customer/addresses/{address_id}/default")
