"""
In-memory session state for the local host.

One guide session per process; nothing is persisted.
"""
import threading
from typing import Optional

from services.geolocation import GeolocationResolver, ResolvedLocation
from services.place_posts import PostFeed
from services.search_form import SearchFormController
from services.travel_api import TravelApiClient, get_default_client
from services.weather_forecast import WeatherController


class GuideSession:
    def __init__(
        self,
        client: Optional[TravelApiClient] = None,
        resolver: Optional[GeolocationResolver] = None,
    ):
        self.lock = threading.Lock()
        self.client = client or get_default_client()
        self.resolver = resolver or GeolocationResolver()
        self.search = SearchFormController()
        self.weather = WeatherController()
        self.posts = PostFeed()
        self.location: Optional[ResolvedLocation] = None

    def resolve_location(self) -> ResolvedLocation:
        """Run the resolver and hand the coordinate to both query screens."""
        located = self.resolver.resolve()
        self.search.apply_coordinate(located.coordinate)
        self.weather.apply_coordinate(located.coordinate)
        self.location = located
        return located

    def ensure_location(self) -> ResolvedLocation:
        if self.location is None:
            return self.resolve_location()
        return self.location


_current: Optional[GuideSession] = None
_current_lock = threading.Lock()


def get_session() -> GuideSession:
    """FastAPI dependency returning the process-wide session."""
    global _current
    with _current_lock:
        if _current is None:
            _current = GuideSession()
        return _current


def reset_session(session: Optional[GuideSession] = None) -> None:
    global _current
    with _current_lock:
        _current = session
