"""
Location detection screen: resolved coordinate, search form and results.
"""
import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.session import GuideSession, get_session
from domain.models import POPULAR_LOCATIONS
from services.render_text import render_results
from services.search_form import CATEGORIES

router = APIRouter()
logger = logging.getLogger(__name__)


class SelectLocation(BaseModel):
    name: str


class LocationView(BaseModel):
    state: str
    detecting: bool
    source: Optional[str] = None
    latitude: float
    longitude: float
    error: Optional[str] = None
    params: Dict[str, Any]
    popular_locations: List[Dict[str, Any]]
    categories: List[str]


class SearchView(BaseModel):
    status: str
    loading: bool
    error: Optional[str] = None
    params: Dict[str, Any]
    results: Optional[Dict[str, Any]] = None
    rendered: Optional[str] = None


def location_to_view(session: GuideSession) -> LocationView:
    resolver = session.resolver
    located = session.location
    coord = located.coordinate if located else resolver.coordinate
    return LocationView(
        state=resolver.state.value,
        detecting=resolver.detecting,
        source=located.source.value if located else None,
        latitude=coord.latitude,
        longitude=coord.longitude,
        # The search banner replaces the informational message once a search has run.
        error=session.search.error or (located.info_error if located else None),
        params=session.search.params.to_payload(),
        popular_locations=[
            {"name": p.name, "lat": p.latitude, "lng": p.longitude} for p in POPULAR_LOCATIONS
        ],
        categories=CATEGORIES,
    )


def search_to_view(session: GuideSession) -> SearchView:
    form = session.search
    results = form.results
    return SearchView(
        status=form.status.value,
        loading=form.loading,
        error=form.error,
        params=form.params.to_payload(),
        results=asdict(results) if results is not None else None,
        rendered=render_results(results) if results is not None else None,
    )


@router.get("", response_model=LocationView)
def get_location(session: GuideSession = Depends(get_session)):
    """Current session location; resolves on first access."""
    with session.lock:
        session.ensure_location()
        return location_to_view(session)


@router.post("/resolve", response_model=LocationView)
def resolve_location(session: GuideSession = Depends(get_session)):
    with session.lock:
        session.resolve_location()
        return location_to_view(session)


@router.post("/select", response_model=LocationView)
def select_location(data: SelectLocation, session: GuideSession = Depends(get_session)):
    with session.lock:
        session.ensure_location()
        if session.search.select_location(data.name) is None:
            raise HTTPException(status_code=404, detail=f"Unknown location: {data.name}")
        return location_to_view(session)


@router.patch("/params", response_model=LocationView)
def update_params(data: Dict[str, Any], session: GuideSession = Depends(get_session)):
    with session.lock:
        session.ensure_location()
        try:
            session.search.update_fields(data)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        return location_to_view(session)


@router.post("/search", response_model=SearchView)
def search_places(session: GuideSession = Depends(get_session)):
    """Submit the current form; failures are reported in the view, not as HTTP errors."""
    with session.lock:
        session.ensure_location()
        session.search.submit(session.client)
        return search_to_view(session)


@router.get("/search", response_model=SearchView)
def get_search(session: GuideSession = Depends(get_session)):
    with session.lock:
        return search_to_view(session)
