"""Error taxonomy shared by the resolver, the API client and the post feed."""
from typing import Optional


class TravelGuideError(Exception):
    """Base class for every error raised by the client."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CapabilityUnavailable(TravelGuideError):
    """The device cannot produce a geolocation fix at all."""


class PositionError(TravelGuideError):
    """A device fix was denied, timed out or is unavailable."""

    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"

    def __init__(self, message: str, reason: str = POSITION_UNAVAILABLE):
        self.reason = reason
        super().__init__(message)


class NetworkError(TravelGuideError):
    """The request never produced a usable HTTP response."""


class ServerError(TravelGuideError):
    """The backend answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class InvalidPost(TravelGuideError):
    """A post is missing required fields or exceeds a limit."""


class AttachmentRejected(TravelGuideError):
    """An image attachment is too large or is not an image."""


class PostNotFound(TravelGuideError):
    def __init__(self, post_id: int):
        self.post_id = post_id
        super().__init__(f"Post {post_id} not found")
