from unittest.mock import MagicMock, patch

import pytest

from domain.errors import NetworkError, ServerError
from domain.models import ResultSet, ScreenStatus
from services.search_form import SEARCH_FAILED_MESSAGE, SearchFormController
from services.travel_api import TravelApiClient


def test_defaults_match_kathmandu_restaurant_search():
    form = SearchFormController()
    assert form.params.to_payload() == {
        "latitude": 27.7172,
        "longitude": 85.3240,
        "radiusInKm": 5.0,
        "category": "restaurant",
        "minRating": 3.0,
        "maxDistance": 10.0,
    }
    assert form.status == ScreenStatus.IDLE


def test_select_location_only_overwrites_coordinates():
    form = SearchFormController()
    form.update_field("radiusInKm", "12")
    form.update_field("category", "nature")

    form.select_location("Pokhara")

    payload = form.params.to_payload()
    assert payload["latitude"] == 28.2096
    assert payload["longitude"] == 83.9856
    assert payload["radiusInKm"] == 12.0
    assert payload["category"] == "nature"
    assert payload["minRating"] == 3.0
    assert payload["maxDistance"] == 10.0


def test_select_unknown_location_is_ignored():
    form = SearchFormController()
    assert form.select_location("Atlantis") is None
    assert form.params.latitude == 27.7172


def test_update_field_parses_numbers_but_not_category():
    form = SearchFormController()
    form.update_field("minRating", "4.5")
    form.update_field("max_distance", 7)
    form.update_field("category", "hotel")
    form.update_field("radiusInKm", "")
    assert form.params.min_rating == 4.5
    assert form.params.max_distance == 7.0
    assert form.params.category == "hotel"
    assert form.params.radius_in_km == 0.0


def test_update_field_does_not_enforce_advisory_limits():
    form = SearchFormController()
    form.update_field("minRating", "9")
    assert form.params.min_rating == 9.0


def test_update_field_rejects_unknown_or_non_numeric():
    form = SearchFormController()
    with pytest.raises(ValueError):
        form.update_field("altitude", "1")
    with pytest.raises(ValueError):
        form.update_field("latitude", "north")


def test_submit_sends_frozen_copy_and_stores_results():
    client = MagicMock()
    client.fetch_places.return_value = ResultSet(nearby_attractions=[])
    form = SearchFormController()
    form.update_field("category", "hotel")
    form.update_field("minRating", 4)

    results = form.submit(client)

    sent = client.fetch_places.call_args[0][0]
    assert sent is not form.params
    assert sent.to_payload() == {
        "latitude": 27.7172,
        "longitude": 85.3240,
        "radiusInKm": 5.0,
        "category": "hotel",
        "minRating": 4.0,
        "maxDistance": 10.0,
    }
    assert results is form.results
    assert form.status == ScreenStatus.LOADED
    assert form.loading is False
    assert form.error is None


@pytest.mark.parametrize(
    "error", [ServerError("API request failed", 502), NetworkError("offline")]
)
def test_submit_failure_sets_banner_and_clears_loading(error):
    client = MagicMock()
    client.fetch_places.side_effect = error
    form = SearchFormController()

    assert form.submit(client) is None
    assert form.status == ScreenStatus.FAILED
    assert form.loading is False
    assert form.error == SEARCH_FAILED_MESSAGE


def test_submit_failure_banner_includes_server_message():
    client = MagicMock()
    client.fetch_places.side_effect = ServerError("Invalid coordinates", 400)
    form = SearchFormController()

    form.submit(client)

    assert form.status == ScreenStatus.FAILED
    assert form.error == f"{SEARCH_FAILED_MESSAGE} (Invalid coordinates)"


@patch("services.travel_api._session.post")
def test_submit_with_malformed_place_body_fails_cleanly(mock_post):
    resp = MagicMock()
    resp.status_code = 200
    resp.ok = True
    resp.json.return_value = {"nearbyAttractions": [{"name": "X", "distanceInKm": "n/a"}]}
    mock_post.return_value = resp
    form = SearchFormController()

    assert form.submit(TravelApiClient(base_url="https://api.example/api")) is None
    assert form.status == ScreenStatus.FAILED
    assert form.loading is False
    assert form.error == SEARCH_FAILED_MESSAGE


def test_update_fields_applies_all_edits():
    form = SearchFormController()
    form.update_fields({"category": "hotel", "minRating": "4", "radiusInKm": 8})
    assert form.params.category == "hotel"
    assert form.params.min_rating == 4.0
    assert form.params.radius_in_km == 8.0


def test_update_fields_leaves_form_untouched_when_any_edit_is_bad():
    form = SearchFormController()
    with pytest.raises(ValueError):
        form.update_fields({"category": "hotel", "minRating": "high"})
    assert form.params.category == "restaurant"
    assert form.params.min_rating == 3.0
