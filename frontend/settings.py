import os
from typing import Optional

# Basic settings helper to read environment configuration.


def _as_float(val: Optional[str], default: Optional[float] = None) -> Optional[float]:
    if val is None or val.strip() == "":
        return default
    try:
        return float(val)
    except ValueError:
        return default


def _as_int(val: Optional[str], default: int) -> int:
    if val is None or val.strip() == "":
        return default
    try:
        return int(val)
    except ValueError:
        return default


class Settings:
    def __init__(self) -> None:
        self.API_BASE_URL: str = os.getenv(
            "TREKSATHI_API_BASE_URL", "https://travelguide-rttu.onrender.com/api"
        ).rstrip("/")
        self.IP_GEOLOCATION_URL: str = os.getenv(
            "TREKSATHI_IP_GEOLOCATION_URL", "https://ipapi.co/json/"
        )
        self.HTTP_TIMEOUT_SEC: float = _as_float(os.getenv("TREKSATHI_HTTP_TIMEOUT_SEC"), 10.0)
        self.GEOLOCATION_TIMEOUT_SEC: float = _as_float(
            os.getenv("TREKSATHI_GEOLOCATION_TIMEOUT_SEC"), 10.0
        )
        # Optional fixed device fix (e.g. a GPS reading piped in by the host).
        self.DEVICE_LAT: Optional[float] = _as_float(os.getenv("TREKSATHI_DEVICE_LAT"))
        self.DEVICE_LON: Optional[float] = _as_float(os.getenv("TREKSATHI_DEVICE_LON"))
        self.MAX_IMAGE_BYTES: int = _as_int(os.getenv("TREKSATHI_MAX_IMAGE_BYTES"), 5000000)
        self.LOG_LEVEL: str = os.getenv("TREKSATHI_LOG_LEVEL", "INFO").upper()


settings = Settings()
