from unittest.mock import MagicMock, patch

from domain.models import Coordinate, ScreenStatus, WeatherSnapshot
from services.travel_api import TravelApiClient
from services.weather_forecast import WEATHER_FAILED_MESSAGE, WeatherController


def test_load_initial_skips_zero_coordinate():
    client = MagicMock()
    screen = WeatherController()
    assert screen.load_initial(client) is None
    client.fetch_weather.assert_not_called()
    assert screen.status == ScreenStatus.IDLE


def test_load_initial_fetches_for_known_coordinate():
    client = MagicMock()
    client.fetch_weather.return_value = WeatherSnapshot(temperature=18)
    screen = WeatherController(Coordinate(27.7172, 85.3240))

    weather = screen.load_initial(client)

    client.fetch_weather.assert_called_once_with(27.7172, 85.3240)
    assert weather.temperature == 18
    assert screen.status == ScreenStatus.LOADED


@patch("services.travel_api._session.get")
def test_http_500_shows_error_and_clears_loading(mock_get):
    resp = MagicMock()
    resp.ok = False
    resp.status_code = 500
    mock_get.return_value = resp
    screen = WeatherController(Coordinate(27.7, 85.3))

    result = screen.submit(TravelApiClient(base_url="https://api.example/api"))

    assert result is None
    assert screen.error == WEATHER_FAILED_MESSAGE
    assert screen.loading is False
    assert screen.status == ScreenStatus.FAILED


def test_update_field_is_numeric():
    screen = WeatherController()
    screen.update_field("latitude", "28.2")
    assert screen.coordinate == Coordinate(28.2, 0.0)
