"""
Core domain models for the TrekSathi travel-guide client.
These are framework-agnostic and shared by the services, the session host and the CLI.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class Category(str, Enum):
    """Place categories understood by the search backend."""
    RESTAURANT = "restaurant"
    HOTEL = "hotel"
    ATTRACTION = "attraction"
    SHOPPING = "shopping"
    NATURE = "nature"


class ScreenStatus(str, Enum):
    """Load state of a single screen (search, weather, post form)."""
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class ResolutionState(str, Enum):
    """
    Progress of the geolocation resolver.

    IDLE → RESOLVING_DEVICE → RESOLVING_BY_IP → RESOLVED
                            ↘─────────────────↗
    """
    IDLE = "idle"
    RESOLVING_DEVICE = "resolving_device"
    RESOLVING_BY_IP = "resolving_by_ip"
    RESOLVED = "resolved"


class LocationSource(str, Enum):
    """Where the resolved coordinate came from."""
    DEVICE = "device"
    IP = "ip"
    DEFAULT = "default"


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def is_sane(self) -> bool:
        """True when the pair lies within the global lat/lon ranges."""
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0


@dataclass(frozen=True)
class GeoRegionBounds:
    """Inclusive lat/lon rectangle used to decide whether a fix is trusted."""
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    def contains(self, coord: Coordinate) -> bool:
        return (
            self.lat_min <= coord.latitude <= self.lat_max
            and self.lon_min <= coord.longitude <= self.lon_max
        )


# Approximate bounding box of Nepal.
NEPAL_BOUNDS = GeoRegionBounds(lat_min=26.0, lat_max=31.0, lon_min=80.0, lon_max=89.0)
NEPAL_COUNTRY_CODE = "NP"

# Kathmandu
DEFAULT_COORDINATE = Coordinate(latitude=27.7172, longitude=85.3240)


@dataclass(frozen=True)
class PopularLocation:
    name: str
    latitude: float
    longitude: float

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


POPULAR_LOCATIONS: List[PopularLocation] = [
    PopularLocation("Kathmandu", 27.7172, 85.3240),
    PopularLocation("Pokhara", 28.2096, 83.9856),
    PopularLocation("Bhaktapur", 27.6710, 85.4298),
    PopularLocation("Lalitpur", 27.6588, 85.3247),
    PopularLocation("Chitwan", 27.5291, 84.3542),
    PopularLocation("Lumbini", 27.4833, 83.2767),
]


def find_popular_location(name: str) -> Optional[PopularLocation]:
    for location in POPULAR_LOCATIONS:
        if location.name == name:
            return location
    return None


@dataclass
class SearchParameters:
    """
    User-adjustable query for the place search.

    Field names follow Python conventions; `to_payload` produces the
    camelCase body the backend expects.
    """
    latitude: float = DEFAULT_COORDINATE.latitude
    longitude: float = DEFAULT_COORDINATE.longitude
    radius_in_km: float = 5.0
    category: str = Category.RESTAURANT.value
    min_rating: float = 3.0
    max_distance: float = 10.0

    # wire name -> attribute name
    WIRE_FIELDS = {
        "latitude": "latitude",
        "longitude": "longitude",
        "radiusInKm": "radius_in_km",
        "category": "category",
        "minRating": "min_rating",
        "maxDistance": "max_distance",
    }

    def copy(self) -> "SearchParameters":
        return replace(self)

    def to_payload(self) -> Dict[str, Any]:
        return {wire: getattr(self, attr) for wire, attr in self.WIRE_FIELDS.items()}


def _optional_float(value: Any) -> Optional[float]:
    """float() for an optional wire number; raises ValueError/TypeError on junk."""
    if value is None or value == "":
        return None
    return float(value)


@dataclass
class AddressRecord:
    road: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AddressRecord":
        return cls(
            road=data.get("road"),
            city=data.get("city"),
            state=data.get("state"),
            country=data.get("country"),
            postal_code=data.get("postalCode"),
        )


@dataclass
class PlaceRecord:
    name: str
    distance_in_km: float = 0.0
    rating: Optional[float] = None
    description: Optional[str] = None
    category: Optional[str] = None
    open_hours: Optional[str] = None
    entry_fee: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlaceRecord":
        return cls(
            name=data.get("name") or "",
            distance_in_km=float(data.get("distanceInKm") or 0.0),
            rating=_optional_float(data.get("rating")),
            description=data.get("description"),
            category=data.get("category"),
            open_hours=data.get("openHours"),
            entry_fee=data.get("entryFee"),
        )


@dataclass
class ResultSet:
    """Combined address/places payload returned by the place search."""
    address: Optional[AddressRecord] = None
    nearby_attractions: Optional[List[PlaceRecord]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResultSet":
        address = data.get("address")
        places = data.get("nearbyAttractions")
        return cls(
            address=AddressRecord.from_dict(address) if isinstance(address, dict) else None,
            nearby_attractions=(
                [PlaceRecord.from_dict(p) for p in places if isinstance(p, dict)]
                if isinstance(places, list)
                else None
            ),
        )

    @property
    def has_places(self) -> bool:
        return bool(self.nearby_attractions)


@dataclass
class ForecastDay:
    date: str
    temp_high: Optional[float] = None
    temp_low: Optional[float] = None
    condition: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ForecastDay":
        return cls(
            date=str(data.get("date") or ""),
            temp_high=_optional_float(data.get("tempHigh")),
            temp_low=_optional_float(data.get("tempLow")),
            condition=data.get("condition"),
        )


@dataclass
class WeatherSnapshot:
    temperature: Optional[float] = None
    weather_description: Optional[str] = None
    humidity: Optional[float] = None
    wind_speed: Optional[float] = None
    pressure: Optional[float] = None
    visibility: Optional[float] = None
    forecast: Optional[List[ForecastDay]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeatherSnapshot":
        forecast = data.get("forecast")
        return cls(
            temperature=_optional_float(data.get("temperature")),
            weather_description=data.get("weatherDescription"),
            humidity=_optional_float(data.get("humidity")),
            wind_speed=_optional_float(data.get("windSpeed")),
            pressure=_optional_float(data.get("pressure")),
            visibility=_optional_float(data.get("visibility")),
            forecast=(
                [ForecastDay.from_dict(d) for d in forecast if isinstance(d, dict)]
                if isinstance(forecast, list)
                else None
            ),
        )


@dataclass
class ImageAttachment:
    """An image attached to a post, held in memory as data URLs."""
    filename: str
    content_type: str
    size_bytes: int
    width: int
    height: int
    data_url: str
    preview_data_url: Optional[str] = None


@dataclass
class Post:
    """A travel post in the local feed. Never persisted."""
    id: int
    title: str
    location: str
    description: str
    author: str = "User"
    timestamp: datetime = field(default_factory=datetime.now)
    likes: int = 0
    comments: List[str] = field(default_factory=list)
    image: Optional[ImageAttachment] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "location": self.location,
            "description": self.description,
            "author": self.author,
            "timestamp": self.timestamp.isoformat(),
            "likes": self.likes,
            "comments": list(self.comments),
            "image": (
                {
                    "filename": self.image.filename,
                    "content_type": self.image.content_type,
                    "size_bytes": self.image.size_bytes,
                    "width": self.image.width,
                    "height": self.image.height,
                    "data_url": self.image.data_url,
                    "preview_data_url": self.image.preview_data_url,
                }
                if self.image
                else None
            ),
        }
