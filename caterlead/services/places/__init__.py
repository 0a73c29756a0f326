"""Place search service: geocoding, text search and website filtering."""

from .exceptions import LocationResolutionError, PlacesAPIError, PlacesError
from .gateway import IGateway, PlaceSearchGateway
from .models import Business, Contact, Coordinates, PlaceCandidate, SearchSummary

__all__ = [
    "Business",
    "Contact",
    "Coordinates",
    "IGateway",
    "LocationResolutionError",
    "PlaceCandidate",
    "PlaceSearchGateway",
    "PlacesAPIError",
    "PlacesError",
    "SearchSummary",
]
