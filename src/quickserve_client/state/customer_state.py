from __future__ import annotations

from typing import Any, Mapping

from ..clients.customer_client import CustomerClient
from ..clients.public_client import PublicClient
from ..models import ProviderSearchQuery
from .base import BaseState, remove_by_id, replace_by_id, same_id


class CustomerState(BaseState):
    name = "customer"

    def __init__(self, client: CustomerClient, public: PublicClient) -> None:
        self.client = client
        self.public = public
        self.clear_data()

    def initial_state(self) -> dict[str, Any]:
        return {
            "profile": None,
            "bookings": [],
            "upcoming_bookings": [],
            "past_bookings": [],
            "selected_booking": None,
            "categories": [],
            "providers": [],
            "selected_provider": None,
            "provider_reviews": [],
            "saved_addresses": [],
            "my_reviews": [],
            "is_loading": False,
            "is_loading_profile": False,
            "is_loading_bookings": False,
            "is_loading_providers": False,
            "error": None,
        }

    # ==================== PROFILE ====================

    def fetch_profile(self) -> Any:
        return self._run(
            "fetch_profile",
            self.client.get_profile,
            fallback="Failed to fetch profile",
            loading="is_loading_profile",
            apply=lambda data: setattr(self, "profile", data),
        )

    def update_profile(self, data: Mapping[str, Any]) -> Any:
        return self._run(
            "update_profile",
            lambda: self.client.update_profile(data),
            fallback="Failed to update profile",
            apply=lambda updated: setattr(self, "profile", updated),
        )

    # ==================== BOOKINGS ====================

    def fetch_bookings(self) -> Any:
        return self._run(
            "fetch_bookings",
            self.client.get_bookings,
            fallback="Failed to fetch bookings",
            loading="is_loading_bookings",
            apply=lambda data: setattr(self, "bookings", data or []),
        )

    def fetch_upcoming_bookings(self) -> Any:
        return self._run(
            "fetch_upcoming_bookings",
            self.client.get_upcoming_bookings,
            fallback="Failed to fetch upcoming bookings",
            loading="is_loading_bookings",
            apply=lambda data: setattr(self, "upcoming_bookings", data or []),
        )

    def fetch_past_bookings(self) -> Any:
        return self._run(
            "fetch_past_bookings",
            self.client.get_past_bookings,
            fallback="Failed to fetch past bookings",
            loading="is_loading_bookings",
            apply=lambda data: setattr(self, "past_bookings", data or []),
        )

    def fetch_booking(self, booking_id: int | str) -> Any:
        return self._run(
            "fetch_booking",
            lambda: self.client.get_booking(booking_id),
            fallback="Failed to fetch booking",
            loading="is_loading_bookings",
            apply=lambda data: setattr(self, "selected_booking", data),
        )

    def create_booking(self, data: Mapping[str, Any]) -> Any:
        def apply(created: Any) -> None:
            self.bookings = [created, *self.bookings]
            self.upcoming_bookings = [created, *self.upcoming_bookings]

        return self._run(
            "create_booking",
            lambda: self.client.create_booking(data),
            fallback="Failed to create booking",
            apply=apply,
        )

    def cancel_booking(self, booking_id: int | str, reason: str | None = None) -> Any:
        def apply(updated: Any) -> None:
            self.bookings = replace_by_id(self.bookings, booking_id, updated)
            self.upcoming_bookings = remove_by_id(self.upcoming_bookings, booking_id)
            self.past_bookings = [updated, *self.past_bookings]

        return self._run(
            "cancel_booking",
            lambda: self.client.cancel_booking(booking_id, reason),
            fallback="Failed to cancel booking",
            apply=apply,
        )

    # ==================== PROVIDERS ====================

    def fetch_categories(self) -> Any:
        return self._run(
            "fetch_categories",
            self.public.get_categories,
            fallback="Failed to fetch categories",
            loading=None,
            apply=lambda data: setattr(self, "categories", data or []),
        )

    def search_providers(self, query: ProviderSearchQuery | Mapping[str, Any] | None = None, **filters: Any) -> Any:
        if query is None:
            query = ProviderSearchQuery.model_validate(filters)

        def apply(data: Any) -> None:
            # the endpoint answers with a list; tolerate a page envelope too
            if isinstance(data, dict):
                data = data.get("content")
            self.providers = data or []

        return self._run(
            "search_providers",
            lambda: self.public.search_providers(query),
            fallback="Failed to search providers",
            loading="is_loading_providers",
            apply=apply,
        )

    def fetch_provider_details(self, provider_id: int | str) -> Any:
        return self._run(
            "fetch_provider_details",
            lambda: self.public.get_provider_details(provider_id),
            fallback="Failed to fetch provider details",
            apply=lambda data: setattr(self, "selected_provider", data),
        )

    def fetch_provider_reviews(self, provider_id: int | str, *, page: int = 0, size: int = 10) -> Any:
        return self._run(
            "fetch_provider_reviews",
            lambda: self.public.get_provider_reviews(provider_id, page=page, size=size),
            fallback="Failed to fetch reviews",
            apply=lambda data: setattr(self, "provider_reviews", data or []),
        )

    def clear_selected_provider(self) -> None:
        self.selected_provider = None
        self.provider_reviews = []

    # ==================== SAVED ADDRESSES ====================

    def fetch_saved_addresses(self) -> Any:
        return self._run(
            "fetch_saved_addresses",
            self.client.get_saved_addresses,
            fallback="Failed to fetch addresses",
            apply=lambda data: setattr(self, "saved_addresses", data or []),
        )

    def add_saved_address(self, data: Mapping[str, Any]) -> Any:
        return self._run(
            "add_saved_address",
            lambda: self.client.add_saved_address(data),
            fallback="Failed to add address",
            apply=lambda created: setattr(self, "saved_addresses", [*self.saved_addresses, created]),
        )

    def update_saved_address(self, address_id: int | str, data: Mapping[str, Any]) -> Any:
        return self._run(
            "update_saved_address",
            lambda: self.client.update_saved_address(address_id, data),
            fallback="Failed to update address",
            apply=lambda updated: setattr(
                self, "saved_addresses", replace_by_id(self.saved_addresses, address_id, updated)
            ),
        )

    def delete_saved_address(self, address_id: int | str) -> Any:
        return self._run(
            "delete_saved_address",
            lambda: self.client.delete_saved_address(address_id),
            fallback="Failed to delete address",
            apply=lambda _: setattr(self, "saved_addresses", remove_by_id(self.saved_addresses, address_id)),
        )

    def set_default_address(self, address_id: int | str) -> Any:
        def apply(_: Any) -> None:
            self.saved_addresses = [
                {**address, "isDefault": same_id(address, address_id)} for address in self.saved_addresses
            ]

        return self._run(
            "set_default_address",
            lambda: self.client.set_default_address(address_id),
            fallback="Failed to set default address",
            apply=apply,
        )

    # ==================== REVIEWS ====================

    def create_review(self, data: Mapping[str, Any]) -> Any:
        booking_id = data.get("bookingId")
        marker = {"hasReview": True, "reviewRating": data.get("rating")}

        def mark(bookings: list[Any]) -> list[Any]:
            return [{**booking, **marker} if same_id(booking, booking_id) else booking for booking in bookings]

        def apply(created: Any) -> None:
            self.my_reviews = [created, *self.my_reviews]
            self.bookings = mark(self.bookings)
            self.past_bookings = mark(self.past_bookings)

        return self._run(
            "create_review",
            lambda: self.client.create_review(data),
            fallback="Failed to create review",
            apply=apply,
        )

    def fetch_my_reviews(self) -> Any:
        return self._run(
            "fetch_my_reviews",
            self.client.get_my_reviews,
            fallback="Failed to fetch reviews",
            apply=lambda data: setattr(self, "my_reviews", data or []),
        )
