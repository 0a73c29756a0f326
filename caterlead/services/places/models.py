"""Pydantic models for the place search service."""

import re
import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

_COORDINATE_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")


class Coordinates(BaseModel):
    """A latitude/longitude pair."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    @classmethod
    def parse(cls, value: str) -> Optional["Coordinates"]:
        """Parse a ``"lat,lng"`` string, or return None for free text."""
        match = _COORDINATE_RE.match(value or "")
        if not match:
            return None
        lat, lng = float(match.group(1)), float(match.group(2))
        if not (-90 <= lat <= 90 and -180 <= lng <= 180):
            return None
        return cls(lat=lat, lng=lng)

    def __str__(self) -> str:
        return f"{self.lat},{self.lng}"


class PlaceCandidate(BaseModel):
    """A raw place returned by a text search, before details are fetched."""

    place_id: str
    name: str = ""
    formatted_address: str = ""
    location: Optional[Coordinates] = None
    types: list[str] = []
    photo_references: list[str] = []


class Contact(BaseModel):
    """Contact channels for a business. Empty strings mean unknown."""

    phone: str = ""
    website: str = ""
    email: str = ""


class Business(BaseModel):
    """A normalized business as returned to callers."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: f"temp_{uuid.uuid4().hex[:12]}")
    name: str
    address: str = ""
    location: Optional[Coordinates] = None
    contact: Contact = Field(default_factory=Contact)
    photos: list[str] = []
    type: str = "business"
    has_event_space: bool = Field(False, alias="hasEventSpace")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class SearchParams(BaseModel):
    """Parameters for a place search."""

    query: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    radius_miles: float = Field(25.0, gt=0)


class SearchSummary(BaseModel):
    """Counts for a completed search, including filtered candidates."""

    candidates_found: int = 0
    businesses_returned: int = 0
    filtered_out: int = 0
