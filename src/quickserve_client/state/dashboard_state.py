from __future__ import annotations

import copy
from typing import Any, Mapping

from ..clients.provider_client import ProviderClient
from ..models import BookingStatus, is_terminal_status
from .base import BaseState, compact, plain, remove_by_id, replace_by_id, same_id, unwrap

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

# Provider preferences the backend has no endpoint for yet; they never leave the client.
DEFAULT_LOCAL_SETTINGS: dict[str, Any] = {
    "service_radius_km": 5,
    "working_hours": {day: {"open": "09:00", "close": "18:00", "isOpen": False} for day in WEEKDAYS},
    "availability": {"acceptingBookings": True, "instantBooking": True, "emergencyServices": True},
    "booking": {"autoConfirm": False, "minLeadTime": 2, "maxAdvanceBooking": 14, "cancellationWindow": 24},
    "payment": {"acceptCash": True, "acceptOnline": True, "acceptUPI": True},
}


class DashboardState(BaseState):
    """Provider dashboard: stats, profile, services and bookings."""

    name = "dashboard"

    def __init__(self, client: ProviderClient) -> None:
        self.client = client
        self.clear_data()

    def initial_state(self) -> dict[str, Any]:
        return {
            "stats": None,
            "profile": None,
            "services": [],
            "bookings": [],
            "upcoming_bookings": [],
            "local_settings": copy.deepcopy(DEFAULT_LOCAL_SETTINGS),
            "is_loading": False,
            "error": None,
        }

    # stats & profile

    def fetch_stats(self) -> Any:
        return self._run(
            "fetch_stats",
            self.client.get_stats,
            fallback="Failed to fetch stats",
            apply=lambda data: setattr(self, "stats", data),
        )

    def fetch_profile(self) -> Any:
        return self._run(
            "fetch_profile",
            self.client.get_profile,
            fallback="Failed to fetch profile",
            apply=lambda data: setattr(self, "profile", data),
        )

    def update_profile(self, data: Mapping[str, Any]) -> Any:
        return self._run(
            "update_profile",
            lambda: self.client.update_profile(data),
            fallback="Failed to update profile",
            apply=lambda updated: setattr(self, "profile", updated),
        )

    def update_availability(self, available: bool) -> Any:
        def apply(_: Any) -> None:
            if self.profile is not None:
                self.profile = {**self.profile, "isAvailable": available}

        return self._run(
            "update_availability",
            lambda: self.client.update_availability(available),
            fallback="Failed to update availability",
            loading=None,
            apply=apply,
        )

    def update_local_settings(self, **changes: Any) -> dict[str, Any]:
        self.local_settings = {**self.local_settings, **changes}
        return self.local_settings

    # services

    def fetch_services(self) -> Any:
        return self._run(
            "fetch_services",
            self.client.get_services,
            fallback="Failed to fetch services",
            apply=lambda data: setattr(self, "services", data or []),
        )

    def create_service(self, data: Mapping[str, Any]) -> Any:
        return self._run(
            "create_service",
            lambda: self.client.create_service(data),
            fallback="Failed to create service",
            apply=lambda created: setattr(self, "services", [created, *self.services]),
        )

    def update_service(self, service_id: int | str, data: Mapping[str, Any]) -> Any:
        return self._run(
            "update_service",
            lambda: self.client.update_service(service_id, data),
            fallback="Failed to update service",
            apply=lambda updated: setattr(self, "services", replace_by_id(self.services, service_id, updated)),
        )

    def delete_service(self, service_id: int | str) -> Any:
        return self._run(
            "delete_service",
            lambda: self.client.delete_service(service_id),
            fallback="Failed to delete service",
            apply=lambda _: setattr(self, "services", remove_by_id(self.services, service_id)),
        )

    def toggle_service_status(self, service_id: int | str) -> Any:
        def apply(_: Any) -> None:
            self.services = [
                {**service, "active": not service.get("active")} if same_id(service, service_id) else service
                for service in self.services
            ]

        return self._run(
            "toggle_service_status",
            lambda: self.client.toggle_service_status(service_id),
            fallback="Failed to toggle service status",
            loading=None,
            apply=apply,
        )

    # bookings

    def fetch_bookings(self) -> Any:
        return self._run(
            "fetch_bookings",
            self.client.get_bookings,
            fallback="Failed to fetch bookings",
            apply=lambda data: setattr(self, "bookings", data or []),
        )

    def fetch_upcoming_bookings(self) -> Any:
        return self._run(
            "fetch_upcoming_bookings",
            self.client.get_upcoming_bookings,
            fallback="Failed to fetch upcoming bookings",
            apply=lambda data: setattr(self, "upcoming_bookings", data or []),
        )

    def update_booking_status(
        self,
        booking_id: int | str,
        status: BookingStatus | str,
        cancellation_reason: str | None = None,
    ) -> Any:
        payload = compact({"status": plain(status), "cancellationReason": cancellation_reason})

        def apply(updated: Any) -> None:
            self.bookings = replace_by_id(self.bookings, booking_id, updated)
            self.upcoming_bookings = [
                booking
                for booking in replace_by_id(self.upcoming_bookings, booking_id, updated)
                if not is_terminal_status(booking.get("status"))
            ]

        return self._run(
            "update_booking_status",
            lambda: self.client.update_booking_status(booking_id, payload),
            fallback="Failed to update booking status",
            apply=apply,
        )

    # combined

    def fetch_dashboard_data(self) -> dict[str, Any]:
        def load() -> dict[str, Any]:
            return {
                "stats": unwrap(self.client.get_stats()),
                "profile": unwrap(self.client.get_profile()),
                "services": unwrap(self.client.get_services()) or [],
                "bookings": unwrap(self.client.get_bookings()) or [],
                "upcoming_bookings": unwrap(self.client.get_upcoming_bookings()) or [],
            }

        def apply(snapshot: dict[str, Any]) -> None:
            for key, value in snapshot.items():
                setattr(self, key, value)

        return self._run(
            "fetch_dashboard_data",
            load,
            fallback="Failed to fetch dashboard data",
            apply=apply,
            envelope=False,
        )
