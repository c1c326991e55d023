"""
Place-search form controller.

Holds the editable SearchParameters, the popular-location shortcuts and the
screen state for one submission at a time.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from domain.errors import ServerError, TravelGuideError
from domain.models import (
    Category,
    Coordinate,
    POPULAR_LOCATIONS,
    PopularLocation,
    ResultSet,
    ScreenStatus,
    SearchParameters,
    find_popular_location,
)
from services.travel_api import PLACES_FAILED_MESSAGE, TravelApiClient

logger = logging.getLogger(__name__)

SEARCH_FAILED_MESSAGE = "Failed to fetch location data. Please try again."
CATEGORIES: List[str] = [c.value for c in Category]


def parse_number(field_name: str, value: Any) -> float:
    """Numeric parse for a form field; an empty field counts as zero."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid number for {field_name}: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if text == "":
        return 0.0
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"Invalid number for {field_name}: {value!r}") from None


class SearchFormController:
    def __init__(self, params: Optional[SearchParameters] = None):
        self.params = params or SearchParameters()
        self.status = ScreenStatus.IDLE
        self.error: Optional[str] = None
        self.results: Optional[ResultSet] = None

    @property
    def loading(self) -> bool:
        return self.status == ScreenStatus.LOADING

    @property
    def popular_locations(self) -> List[PopularLocation]:
        return list(POPULAR_LOCATIONS)

    def apply_coordinate(self, coord: Coordinate) -> None:
        self.params.latitude = coord.latitude
        self.params.longitude = coord.longitude

    def select_location(self, name: str) -> Optional[PopularLocation]:
        """Overwrite latitude/longitude from a named shortcut; unknown names are ignored."""
        location = find_popular_location(name)
        if location is not None:
            self.apply_coordinate(location.coordinate)
        return location

    def update_field(self, name: str, value: Any) -> None:
        """
        Apply one form edit by wire name ("radiusInKm") or attribute name
        ("radius_in_km"). Every field except category is parsed as a number;
        min/max hints are not enforced here.
        """
        attr = SearchParameters.WIRE_FIELDS.get(name, name)
        if attr not in SearchParameters.WIRE_FIELDS.values():
            raise ValueError(f"Unknown search field: {name}")
        if attr == "category":
            setattr(self.params, attr, str(value))
        else:
            setattr(self.params, attr, parse_number(name, value))

    def update_fields(self, edits: Dict[str, Any]) -> None:
        """Apply several edits at once; nothing changes unless every field parses."""
        scratch = SearchFormController(self.params.copy())
        for name, value in edits.items():
            scratch.update_field(name, value)
        self.params = scratch.params

    def submit(self, client: TravelApiClient) -> Optional[ResultSet]:
        """Send the current parameters as one request and record the outcome."""
        request = self.params.copy()
        self.status = ScreenStatus.LOADING
        self.error = None
        try:
            self.results = client.fetch_places(request)
        except TravelGuideError as exc:
            logger.error("API error: %s", exc.message)
            self.status = ScreenStatus.FAILED
            self.error = SEARCH_FAILED_MESSAGE
            if isinstance(exc, ServerError) and exc.message != PLACES_FAILED_MESSAGE:
                self.error = f"{SEARCH_FAILED_MESSAGE} ({exc.message})"
            return None
        self.status = ScreenStatus.LOADED
        return self.results
