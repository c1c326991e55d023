"""
Thin HTTP client for the TrekSathi backend.

Two independent calls, no batching, no retry, no caching:
- POST {base}/LocationDetection  (place search)
- GET  {base}/Weather?lat=..&lon=..
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from domain.errors import NetworkError, ServerError
from domain.models import ResultSet, SearchParameters, WeatherSnapshot
from settings import settings

logger = logging.getLogger(__name__)
_session = requests.Session()

PLACES_FAILED_MESSAGE = "API request failed"
WEATHER_FAILED_MESSAGE = "Weather API request failed"


def _decode_json(resp: requests.Response, what: str) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise NetworkError(f"{what} returned a malformed response") from exc


def _server_message(resp: requests.Response) -> Optional[str]:
    """Best-effort extraction of the `message` field from an error body."""
    try:
        data = resp.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        message = data.get("message")
        if message:
            return str(message)
    return None


class TravelApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.session = session or _session
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SEC

    def fetch_places(self, params: SearchParameters) -> ResultSet:
        """Search for places around `params`; raises ServerError/NetworkError."""
        url = f"{self.base_url}/LocationDetection"
        payload = params.to_payload()
        try:
            resp = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Error in fetch_places: %s", exc)
            raise NetworkError(str(exc)) from exc

        if not resp.ok:
            message = _server_message(resp) or PLACES_FAILED_MESSAGE
            logger.error("Error in fetch_places: HTTP %s %s", resp.status_code, message)
            raise ServerError(message, status_code=resp.status_code)

        data = _decode_json(resp, "LocationDetection")
        if not isinstance(data, dict):
            raise NetworkError("LocationDetection returned a malformed response")
        try:
            return ResultSet.from_dict(data)
        except (ValueError, TypeError) as exc:
            logger.error("Error in fetch_places: malformed body: %s", exc)
            raise NetworkError("LocationDetection returned a malformed response") from exc

    def fetch_weather(self, lat: float, lon: float) -> WeatherSnapshot:
        """Fetch current weather for a coordinate; server messages are not propagated."""
        url = f"{self.base_url}/Weather"
        try:
            resp = self.session.get(
                url, params={"lat": lat, "lon": lon}, timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.error("Error in fetch_weather: %s", exc)
            raise NetworkError(str(exc)) from exc

        if not resp.ok:
            logger.error("Error in fetch_weather: HTTP %s", resp.status_code)
            raise ServerError(WEATHER_FAILED_MESSAGE, status_code=resp.status_code)

        data = _decode_json(resp, "Weather")
        if not isinstance(data, dict):
            raise NetworkError("Weather returned a malformed response")
        try:
            return WeatherSnapshot.from_dict(data)
        except (ValueError, TypeError) as exc:
            logger.error("Error in fetch_weather: malformed body: %s", exc)
            raise NetworkError("Weather returned a malformed response") from exc


_default_client: Optional[TravelApiClient] = None


def get_default_client() -> TravelApiClient:
    global _default_client
    if _default_client is None:
        _default_client = TravelApiClient()
    return _default_client
