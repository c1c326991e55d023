"""Best-effort session coordinate via a layered fallback chain.

Order: one high-accuracy device fix, then one IP-based lookup, then the
Kathmandu default. Out-of-region results from either source are ignored
rather than reported, and nothing the resolver does is fatal: every path ends
in RESOLVED with a usable coordinate.

Device and IP sources are injected so the chain can be driven without real
hardware or network access.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import requests

from domain.errors import CapabilityUnavailable, NetworkError, PositionError
from domain.models import (
    DEFAULT_COORDINATE,
    NEPAL_BOUNDS,
    NEPAL_COUNTRY_CODE,
    Coordinate,
    GeoRegionBounds,
    LocationSource,
    ResolutionState,
)
from settings import settings

logger = logging.getLogger(__name__)
_session = requests.Session()

CAPABILITY_UNAVAILABLE_MESSAGE = "Geolocation is not supported on this device."


@dataclass(frozen=True)
class PositionOptions:
    enable_high_accuracy: bool = True
    timeout_sec: float = 10.0
    maximum_age_sec: float = 0.0  # never accept a cached fix


@dataclass(frozen=True)
class DeviceFix:
    """Raw reading from a device locator; values are not validated yet."""
    latitude: Any
    longitude: Any
    accuracy_m: Optional[float] = None


@dataclass(frozen=True)
class IpLocation:
    latitude: Any
    longitude: Any
    country: Optional[str]


class DeviceLocator(Protocol):
    def is_available(self) -> bool:
        ...

    def current_position(self, options: PositionOptions) -> DeviceFix:
        """Return one fix or raise PositionError."""
        ...


class IpLocator(Protocol):
    def lookup(self) -> IpLocation:
        """Return the network location or raise NetworkError."""
        ...


class NoDeviceLocator:
    """A host without any positioning hardware."""

    def is_available(self) -> bool:
        return False

    def current_position(self, options: PositionOptions) -> DeviceFix:
        raise CapabilityUnavailable(CAPABILITY_UNAVAILABLE_MESSAGE)


class StaticDeviceLocator:
    """Device locator backed by a fixed reading (e.g. from the environment)."""

    def __init__(self, fix: Optional[DeviceFix] = None):
        self.fix = fix

    def is_available(self) -> bool:
        return True

    def current_position(self, options: PositionOptions) -> DeviceFix:
        if self.fix is None:
            raise PositionError("No position available", PositionError.POSITION_UNAVAILABLE)
        return self.fix


class IpApiLocator:
    """IP geolocation through an ipapi.co-compatible endpoint."""

    def __init__(
        self,
        url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.url = url or settings.IP_GEOLOCATION_URL
        self.session = session or _session
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SEC

    def lookup(self) -> IpLocation:
        try:
            resp = self.session.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise NetworkError(f"IP geolocation failed: {exc}") from exc
        if not isinstance(data, dict):
            raise NetworkError("IP geolocation returned a malformed response")
        return IpLocation(
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            country=data.get("country"),
        )


def default_device_locator() -> DeviceLocator:
    """Static locator when TREKSATHI_DEVICE_LAT/LON are set, otherwise none."""
    if settings.DEVICE_LAT is None or settings.DEVICE_LON is None:
        return NoDeviceLocator()
    return StaticDeviceLocator(DeviceFix(settings.DEVICE_LAT, settings.DEVICE_LON))


def _as_coordinate(latitude: Any, longitude: Any) -> Optional[Coordinate]:
    """Coordinate from raw values, or None when either is missing, zero or not numeric."""
    values = []
    for raw in (latitude, longitude):
        if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
            return None
        try:
            value = float(raw)
        except ValueError:
            return None
        if not value or math.isnan(value) or math.isinf(value):
            return None
        values.append(value)
    return Coordinate(values[0], values[1])


@dataclass(frozen=True)
class ResolvedLocation:
    coordinate: Coordinate
    source: LocationSource
    info_error: Optional[str] = None


class GeolocationResolver:
    def __init__(
        self,
        device: Optional[DeviceLocator] = None,
        ip: Optional[IpLocator] = None,
        bounds: GeoRegionBounds = NEPAL_BOUNDS,
        default: Coordinate = DEFAULT_COORDINATE,
        country_code: str = NEPAL_COUNTRY_CODE,
        options: Optional[PositionOptions] = None,
    ):
        self.device = device if device is not None else default_device_locator()
        self.ip = ip if ip is not None else IpApiLocator()
        self.bounds = bounds
        self.default = default
        self.country_code = country_code
        self.options = options or PositionOptions(timeout_sec=settings.GEOLOCATION_TIMEOUT_SEC)
        self.state = ResolutionState.IDLE
        self.coordinate = default
        self.source = LocationSource.DEFAULT
        self.info_error: Optional[str] = None

    @property
    def detecting(self) -> bool:
        """Drives the "detecting your location" indicator."""
        return self.state != ResolutionState.RESOLVED

    def _transition(self, state: ResolutionState) -> None:
        logger.debug("Geolocation resolver %s -> %s", self.state.value, state.value)
        self.state = state

    def _adopt(self, coord: Coordinate, source: LocationSource) -> None:
        self.coordinate = coord
        self.source = source

    def _accepts(self, coord: Coordinate) -> bool:
        return coord.is_sane() and self.bounds.contains(coord)

    def resolve(self) -> ResolvedLocation:
        """Run the fallback chain once and return the session coordinate."""
        self.coordinate = self.default
        self.source = LocationSource.DEFAULT
        self.info_error = None

        if self._resolve_by_device():
            self._transition(ResolutionState.RESOLVED)
        else:
            self._resolve_by_ip()
            self._transition(ResolutionState.RESOLVED)

        logger.info(
            "Resolved session location %.4f,%.4f (source=%s)",
            self.coordinate.latitude,
            self.coordinate.longitude,
            self.source.value,
        )
        return ResolvedLocation(self.coordinate, self.source, self.info_error)

    def _resolve_by_device(self) -> bool:
        """One device attempt. True when the chain ends here."""
        if not self.device.is_available():
            self.info_error = CAPABILITY_UNAVAILABLE_MESSAGE
            logger.info("Device geolocation unavailable; falling back to IP lookup")
            return False

        self._transition(ResolutionState.RESOLVING_DEVICE)
        try:
            fix = self.device.current_position(self.options)
        except CapabilityUnavailable as exc:
            self.info_error = exc.message
            logger.info("Device geolocation unavailable; falling back to IP lookup")
            return False
        except PositionError as exc:
            logger.warning("Geolocation error (%s): %s", exc.reason, exc.message)
            return False

        coord = _as_coordinate(fix.latitude, fix.longitude)
        if coord is None:
            logger.info("Invalid device coordinates, falling back to IP location")
            return False

        if self._accepts(coord):
            self._adopt(coord, LocationSource.DEVICE)
        else:
            # Out-of-region fix is terminal: keep the default, skip the IP lookup.
            logger.info("Device location outside region, using default")
        return True

    def _resolve_by_ip(self) -> None:
        self._transition(ResolutionState.RESOLVING_BY_IP)
        try:
            located = self.ip.lookup()
        except NetworkError as exc:
            logger.warning("IP geolocation failed: %s", exc.message)
            return

        if located.country != self.country_code:
            logger.info("IP location not in %s, using default location", self.country_code)
            return

        coord = _as_coordinate(located.latitude, located.longitude)
        if coord is None or not self._accepts(coord):
            logger.info("IP location unusable or outside region, using default location")
            return
        self._adopt(coord, LocationSource.IP)
