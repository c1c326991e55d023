"""
Weather forecast screen.
"""
from dataclasses import asdict
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.session import GuideSession, get_session
from domain.models import ScreenStatus
from services.render_text import render_weather

router = APIRouter()


class WeatherQuery(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class WeatherView(BaseModel):
    status: str
    loading: bool
    error: Optional[str] = None
    latitude: float
    longitude: float
    weather: Optional[Dict[str, Any]] = None
    rendered: Optional[str] = None


def weather_to_view(session: GuideSession) -> WeatherView:
    screen = session.weather
    weather = screen.weather
    return WeatherView(
        status=screen.status.value,
        loading=screen.loading,
        error=screen.error,
        latitude=screen.latitude,
        longitude=screen.longitude,
        weather=asdict(weather) if weather is not None else None,
        rendered=render_weather(weather) if weather is not None else None,
    )


@router.get("", response_model=WeatherView)
def get_weather(session: GuideSession = Depends(get_session)):
    """Weather for the session location; fetched automatically on first access."""
    with session.lock:
        session.ensure_location()
        if session.weather.status == ScreenStatus.IDLE:
            session.weather.load_initial(session.client)
        return weather_to_view(session)


@router.post("/search", response_model=WeatherView)
def search_weather(query: WeatherQuery, session: GuideSession = Depends(get_session)):
    with session.lock:
        try:
            if query.latitude is not None:
                session.weather.update_field("latitude", query.latitude)
            if query.longitude is not None:
                session.weather.update_field("longitude", query.longitude)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        session.weather.submit(session.client)
        return weather_to_view(session)
