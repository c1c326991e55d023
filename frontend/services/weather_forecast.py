"""Weather screen controller: coordinate form plus one fetch at a time."""
from __future__ import annotations

import logging
from typing import Any, Optional

from domain.errors import TravelGuideError
from domain.models import Coordinate, ScreenStatus, WeatherSnapshot
from services.search_form import parse_number
from services.travel_api import TravelApiClient

logger = logging.getLogger(__name__)

WEATHER_FAILED_MESSAGE = "Failed to fetch weather data. Please try again."


class WeatherController:
    def __init__(self, coordinate: Optional[Coordinate] = None):
        coordinate = coordinate or Coordinate(0.0, 0.0)
        self.latitude = coordinate.latitude
        self.longitude = coordinate.longitude
        self.status = ScreenStatus.IDLE
        self.error: Optional[str] = None
        self.weather: Optional[WeatherSnapshot] = None

    @property
    def loading(self) -> bool:
        return self.status == ScreenStatus.LOADING

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)

    def apply_coordinate(self, coord: Coordinate) -> None:
        self.latitude = coord.latitude
        self.longitude = coord.longitude

    def update_field(self, name: str, value: Any) -> None:
        if name not in ("latitude", "longitude"):
            raise ValueError(f"Unknown weather field: {name}")
        setattr(self, name, parse_number(name, value))

    def load_initial(self, client: TravelApiClient) -> Optional[WeatherSnapshot]:
        """Fetch automatically once a non-zero coordinate is known."""
        if not (self.latitude and self.longitude):
            return None
        return self.submit(client)

    def submit(self, client: TravelApiClient) -> Optional[WeatherSnapshot]:
        self.status = ScreenStatus.LOADING
        self.error = None
        try:
            self.weather = client.fetch_weather(self.latitude, self.longitude)
        except TravelGuideError as exc:
            logger.error("API error: %s", exc.message)
            self.status = ScreenStatus.FAILED
            self.error = WEATHER_FAILED_MESSAGE
            return None
        self.status = ScreenStatus.LOADED
        return self.weather
