from __future__ import annotations

import json

import pytest
import responses
from responses import matchers

from helpers import envelope, error_body, url
from quickserve_client.clients import ProviderClient
from quickserve_client.exceptions import InvalidResponseError, NotFoundError, ServerError, ValidationError
from quickserve_client.models import BookingStatus
from quickserve_client.state import DashboardState
from quickserve_client.state.dashboard_state import DEFAULT_LOCAL_SETTINGS


@pytest.fixture
def dashboard(http) -> DashboardState:
    return DashboardState(ProviderClient(http=http))


@responses.activate
def test_create_service_prepends_confirmed_entity(dashboard: DashboardState) -> None:
    dashboard.services = [{"id": 1, "name": "Wiring", "active": True}]
    created = {"id": 9, "name": "Plumbing Fix", "price": 500, "active": True}
    responses.add(
        responses.POST,
        url("/provider/services"),
        match=[matchers.json_params_matcher({"name": "Plumbing Fix", "price": 500})],
        json=envelope(created),
        status=201,
    )

    assert dashboard.create_service({"name": "Plumbing Fix", "price": 500}) == created

    assert dashboard.services[0] == created
    assert len(dashboard.services) == 2
    assert dashboard.is_loading is False


@responses.activate
def test_toggle_then_delete_removes_service(dashboard: DashboardState) -> None:
    dashboard.services = [{"id": 9, "name": "Plumbing Fix", "active": True}, {"id": 10, "active": True}]
    responses.add(responses.PATCH, url("/provider/services/9/toggle"), json=envelope(None))
    responses.add(responses.DELETE, url("/provider/services/9"), json=envelope(None))

    dashboard.toggle_service_status(9)
    assert dashboard.services[0]["active"] is False
    assert dashboard.services[1]["active"] is True

    dashboard.delete_service("9")
    assert [service["id"] for service in dashboard.services] == [10]


@responses.activate
def test_failed_mutation_leaves_data_untouched(dashboard: DashboardState) -> None:
    dashboard.services = [{"id": 9, "name": "Plumbing Fix", "active": True}]
    responses.add(responses.DELETE, url("/provider/services/9"), json=error_body("Service not found", 404), status=404)

    with pytest.raises(NotFoundError):
        dashboard.delete_service(9)

    assert dashboard.services == [{"id": 9, "name": "Plumbing Fix", "active": True}]
    assert dashboard.error == "Service not found"
    assert dashboard.is_loading is False


@responses.activate
def test_failure_without_server_message_uses_fallback(dashboard: DashboardState) -> None:
    responses.add(responses.GET, url("/provider/services"), body="", status=503)

    with pytest.raises(ServerError):
        dashboard.fetch_services()

    assert dashboard.error == "Failed to fetch services"


@responses.activate
def test_new_action_clears_previous_error(dashboard: DashboardState) -> None:
    dashboard.error = "Failed to fetch services"
    responses.add(responses.GET, url("/provider/stats"), json=envelope({"totalBookings": 4}))

    dashboard.fetch_stats()

    assert dashboard.error is None
    assert dashboard.stats == {"totalBookings": 4}


@responses.activate
def test_completed_booking_leaves_upcoming(dashboard: DashboardState) -> None:
    dashboard.bookings = [{"id": 5, "status": "CONFIRMED"}, {"id": 6, "status": "PENDING"}]
    dashboard.upcoming_bookings = [{"id": 5, "status": "CONFIRMED"}, {"id": 6, "status": "PENDING"}]
    responses.add(
        responses.PATCH,
        url("/provider/bookings/5/status"),
        match=[matchers.json_params_matcher({"status": "COMPLETED"})],
        json=envelope({"id": 5, "status": "COMPLETED"}),
    )

    dashboard.update_booking_status(5, BookingStatus.COMPLETED)

    assert dashboard.bookings[0] == {"id": 5, "status": "COMPLETED"}
    assert dashboard.upcoming_bookings == [{"id": 6, "status": "PENDING"}]


@responses.activate
def test_confirmed_booking_stays_upcoming_with_reason_sent(dashboard: DashboardState) -> None:
    dashboard.upcoming_bookings = [{"id": 6, "status": "PENDING"}]
    responses.add(
        responses.PATCH,
        url("/provider/bookings/6/status"),
        match=[matchers.json_params_matcher({"status": "cancelled", "cancellationReason": "Unavailable"})],
        json=envelope({"id": 6, "status": "cancelled"}),
    )

    dashboard.update_booking_status(6, "cancelled", cancellation_reason="Unavailable")

    assert dashboard.upcoming_bookings == []


@responses.activate
def test_update_availability_does_not_touch_loading_flag(dashboard: DashboardState) -> None:
    dashboard.profile = {"id": 2, "isAvailable": True}
    responses.add(
        responses.PATCH,
        url("/provider/availability"),
        match=[matchers.json_params_matcher({"available": False})],
        json=envelope(None),
    )

    dashboard.update_availability(False)

    assert dashboard.profile == {"id": 2, "isAvailable": False}
    assert dashboard.is_loading is False


@responses.activate
def test_fetch_dashboard_data_loads_everything(dashboard: DashboardState) -> None:
    responses.add(responses.GET, url("/provider/stats"), json=envelope({"totalBookings": 3}))
    responses.add(responses.GET, url("/provider/profile"), json=envelope({"id": 2}))
    responses.add(responses.GET, url("/provider/services"), json=envelope([{"id": 9}]))
    responses.add(responses.GET, url("/provider/bookings"), json=envelope([{"id": 5}]))
    responses.add(responses.GET, url("/provider/bookings/upcoming"), json=envelope(None))

    dashboard.fetch_dashboard_data()

    assert dashboard.stats == {"totalBookings": 3}
    assert dashboard.profile == {"id": 2}
    assert dashboard.services == [{"id": 9}]
    assert dashboard.bookings == [{"id": 5}]
    assert dashboard.upcoming_bookings == []


@responses.activate
def test_fetch_dashboard_data_is_all_or_nothing(dashboard: DashboardState) -> None:
    responses.add(responses.GET, url("/provider/stats"), json=envelope({"totalBookings": 3}))
    responses.add(responses.GET, url("/provider/profile"), json=error_body("Profile missing", 404), status=404)

    with pytest.raises(NotFoundError):
        dashboard.fetch_dashboard_data()

    assert dashboard.stats is None
    assert dashboard.error == "Profile missing"


def test_local_settings_are_client_only_and_reset(dashboard: DashboardState) -> None:
    dashboard.update_local_settings(service_radius_km=12)
    dashboard.local_settings["working_hours"]["monday"]["isOpen"] = True
    assert dashboard.local_settings["service_radius_km"] == 12

    dashboard.clear_data()

    assert dashboard.local_settings == DEFAULT_LOCAL_SETTINGS
    assert DEFAULT_LOCAL_SETTINGS["working_hours"]["monday"]["isOpen"] is False


def test_clear_data_is_idempotent(dashboard: DashboardState) -> None:
    dashboard.services = [{"id": 1}]
    dashboard.error = "boom"

    dashboard.clear_data()
    first = dashboard.snapshot()
    dashboard.clear_data()

    assert dashboard.snapshot() == first
    assert first["services"] == []
    assert first["error"] is None


@responses.activate
def test_loading_flag_is_raised_while_request_runs(dashboard: DashboardState) -> None:
    seen: list[bool] = []

    def reply(request):
        seen.append(dashboard.is_loading)
        return 200, {}, json.dumps(envelope([{"id": 9}]))

    responses.add_callback(responses.GET, url("/provider/services"), callback=reply)

    dashboard.fetch_services()

    assert seen == [True]
    assert dashboard.is_loading is False
    assert dashboard.services == [{"id": 9}]


@responses.activate
def test_non_json_success_body_uses_fallback(dashboard: DashboardState) -> None:
    dashboard.services = [{"id": 1}]
    responses.add(
        responses.GET,
        url("/provider/services"),
        body="<html>maintenance</html>",
        status=200,
        content_type="text/html",
    )

    with pytest.raises(InvalidResponseError):
        dashboard.fetch_services()

    assert dashboard.error == "Failed to fetch services"
    assert dashboard.services == [{"id": 1}]
    assert dashboard.is_loading is False


@responses.activate
def test_update_service_replaces_matching_entry(dashboard: DashboardState) -> None:
    dashboard.services = [{"id": 9, "name": "Plumbing Fix", "price": 500}, {"id": 10, "name": "Wiring"}]
    updated = {"id": 9, "name": "Plumbing Fix", "price": 650}
    responses.add(
        responses.PUT,
        url("/provider/services/9"),
        match=[matchers.json_params_matcher({"price": 650})],
        json=envelope(updated),
    )

    dashboard.update_service("9", {"price": 650})

    assert dashboard.services == [updated, {"id": 10, "name": "Wiring"}]


@responses.activate
def test_update_service_failure_keeps_services(dashboard: DashboardState) -> None:
    dashboard.services = [{"id": 9, "price": 500}]
    responses.add(responses.PUT, url("/provider/services/9"), json=error_body("Price must be positive"), status=400)

    with pytest.raises(ValidationError):
        dashboard.update_service(9, {"price": -1})

    assert dashboard.services == [{"id": 9, "price": 500}]
    assert dashboard.error == "Price must be positive"


@responses.activate
def test_update_profile_replaces_profile(dashboard: DashboardState) -> None:
    dashboard.profile = {"id": 2, "businessName": "Old"}
    responses.add(
        responses.PUT,
        url("/provider/profile"),
        match=[matchers.json_params_matcher({"businessName": "Fixit"})],
        json=envelope({"id": 2, "businessName": "Fixit"}),
    )

    dashboard.update_profile({"businessName": "Fixit"})

    assert dashboard.profile == {"id": 2, "businessName": "Fixit"}


@responses.activate
def test_update_profile_failure_uses_fallback(dashboard: DashboardState) -> None:
    dashboard.profile = {"id": 2, "businessName": "Old"}
    responses.add(responses.PUT, url("/provider/profile"), body="", status=500)

    with pytest.raises(ServerError):
        dashboard.update_profile({"businessName": "Fixit"})

    assert dashboard.profile == {"id": 2, "businessName": "Old"}
    assert dashboard.error == "Failed to update profile"
