"""Custom exceptions for the place search service."""


class PlacesError(Exception):
    """Base exception for all place-search errors."""


class LocationResolutionError(PlacesError):
    """Raised when a free-text location cannot be geocoded."""


class PlacesAPIError(PlacesError):
    """Raised when the Places API returns a non-successful status."""

    def __init__(self, status: str, message: str | None = None):
        self.status = status
        super().__init__(f"Places API error: {status}" + (f" - {message}" if message else ""))
