"""
Plain-text rendering of search results, weather and posts.

Pure display: every function takes domain objects and returns a string.
"""
from typing import Any, List, Optional

from domain.models import (
    AddressRecord,
    ForecastDay,
    PlaceRecord,
    Post,
    ResultSet,
    WeatherSnapshot,
)

NO_DESCRIPTION = "No description available"
NO_PLACES_FOUND = "No nearby places found. Try adjusting your search parameters."


def format_number(value: Any) -> str:
    """Render 4.0 as '4' and 4.5 as '4.5'; None renders as '-'."""
    if value is None:
        return "-"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _join_present(*parts: Optional[str]) -> str:
    return ", ".join(p for p in parts if p)


def render_address(address: AddressRecord) -> str:
    """Address lines built only from the sub-fields that are present."""
    lines = [
        _join_present(address.road, address.city),
        _join_present(address.state, address.country),
        address.postal_code or "",
    ]
    return "\n".join(line for line in lines if line)


def render_place_card(place: PlaceRecord) -> str:
    header = place.name
    if place.rating is not None and place.rating > 0:
        header = f"{header}  ⭐ {format_number(place.rating)}"
    lines = [
        header,
        f"  {place.description or NO_DESCRIPTION}",
        f"  Category: {place.category or '-'}",
        f"  Distance: {place.distance_in_km:.2f} km",
    ]
    if place.open_hours:
        lines.append(f"  Hours: {place.open_hours}")
    if place.entry_fee:
        lines.append(f"  Entry Fee: {place.entry_fee}")
    return "\n".join(lines)


def render_results(results: ResultSet) -> str:
    sections: List[str] = ["Results"]
    if results.address is not None:
        address_text = render_address(results.address)
        sections.append("Current Location\n" + (address_text or "-"))

    if results.has_places:
        cards = [render_place_card(p) for p in results.nearby_attractions or []]
        sections.append("Nearby Places\n" + "\n\n".join(cards))
    else:
        sections.append(NO_PLACES_FOUND)
    return "\n\n".join(sections)


def render_forecast_day(day: ForecastDay) -> str:
    temps = f"{format_number(day.temp_high)}°/{format_number(day.temp_low)}°"
    return f"{day.date}  {temps}  {day.condition or ''}".rstrip()


def render_weather(weather: WeatherSnapshot) -> str:
    lines = [
        "Current Weather",
        f"{format_number(weather.temperature)}°C  {weather.weather_description or ''}".rstrip(),
        f"Humidity: {format_number(weather.humidity)}%",
        f"Wind Speed: {format_number(weather.wind_speed)} km/h",
        f"Pressure: {format_number(weather.pressure)} hPa",
        f"Visibility: {format_number(weather.visibility)} km",
    ]
    if weather.forecast:
        lines.append("")
        lines.append("5-Day Forecast")
        lines.extend(render_forecast_day(day) for day in weather.forecast)
    return "\n".join(lines)


def render_post(post: Post) -> str:
    comments = len(post.comments)
    lines = [
        post.title,
        f"{post.author} • {post.location} • {post.timestamp.date().isoformat()}",
        post.description,
    ]
    if post.image is not None:
        lines.append(f"[image: {post.image.filename}, {post.image.width}x{post.image.height}]")
    lines.append(f"{post.likes} likes • {comments} comments")
    return "\n".join(lines)
