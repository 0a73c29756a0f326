"""Place search gateway: location resolution, text search and detail fan-out."""

import asyncio
from abc import ABC, abstractmethod
from typing import AsyncIterator, Optional, Union

import httpx
from loguru import logger

from caterlead.config import settings
from caterlead.core.logging import log_execution_time
from caterlead.services.places.client import GooglePlacesClient
from caterlead.services.places.models import (
    Business,
    Contact,
    Coordinates,
    PlaceCandidate,
    SearchSummary,
)

GENERIC_TYPES = {"point_of_interest", "establishment", "premise", "political"}

EVENT_SPACE_TYPES = {
    "event_venue",
    "banquet_hall",
    "conference_center",
    "concert_hall",
    "restaurant",
    "wedding_hall",
}


def category_for(types: list[str]) -> str:
    for t in types:
        if t not in GENERIC_TYPES:
            return t
    return "business"


def has_event_space(types: list[str]) -> bool:
    return any(t in EVENT_SPACE_TYPES for t in types)


class IGateway(ABC):
    """Place search interface."""

    @abstractmethod
    async def search(
        self,
        query: str,
        location: Union[str, Coordinates],
        radius_miles: float = 25.0,
    ) -> list[Business]:
        """Return businesses with a website near ``location``."""
        ...


class PlaceSearchGateway(IGateway):
    """Finds businesses with a website near a location via Google Places.

    Detail fetches run concurrently but never more than ``max_concurrency``
    at a time. Candidates whose details fail or have no website are dropped.
    """

    def __init__(
        self,
        places: Optional[GooglePlacesClient] = None,
        max_concurrency: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        if places is None:
            if not settings.google_places_api_key:
                raise ValueError("GOOGLE_PLACES_API_KEY is not configured")
            places = GooglePlacesClient(api_key=settings.google_places_api_key)
        self.places = places
        self.max_concurrency = max_concurrency or settings.places_max_concurrency
        self.timeout = timeout or settings.places_request_timeout
        self._semaphore = asyncio.Semaphore(self.max_concurrency)
        self.last_summary = SearchSummary()

    def open_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout)

    async def resolve_location(
        self, client: httpx.AsyncClient, location: Union[str, Coordinates]
    ) -> Coordinates:
        """Coordinates pass through, ``"lat,lng"`` is parsed, anything else is geocoded."""
        if isinstance(location, Coordinates):
            return location
        coords = Coordinates.parse(location)
        if coords:
            return coords
        logger.info(f"Geocoding location '{location}'")
        return await self.places.geocode(client, location)

    async def find_candidates(
        self,
        client: httpx.AsyncClient,
        query: str,
        location: Coordinates,
        radius_miles: float,
    ) -> list[PlaceCandidate]:
        candidates = await self.places.text_search(client, query, location, radius_miles)
        logger.info(
            f"Text search '{query}' near {location} ({radius_miles} mi): "
            f"{len(candidates)} candidates"
        )
        self.last_summary = SearchSummary(candidates_found=len(candidates))
        return candidates

    @log_execution_time
    async def search(
        self,
        query: str,
        location: Union[str, Coordinates],
        radius_miles: float = 25.0,
    ) -> list[Business]:
        """Search and return businesses in candidate order."""
        async with self.open_client() as client:
            coords = await self.resolve_location(client, location)
            candidates = await self.find_candidates(client, query, coords, radius_miles)
            if not candidates:
                return []

            results = await asyncio.gather(
                *[self._fetch_business(client, c) for c in candidates]
            )

        businesses = [b for b in results if b is not None]
        self._record(len(candidates), len(businesses))
        return businesses

    async def iter_businesses(
        self, client: httpx.AsyncClient, candidates: list[PlaceCandidate]
    ) -> AsyncIterator[Business]:
        """Yield businesses in the order their detail fetches complete."""
        tasks = [
            asyncio.ensure_future(self._fetch_business(client, c)) for c in candidates
        ]
        returned = 0
        try:
            for fut in asyncio.as_completed(tasks):
                business = await fut
                if business is not None:
                    returned += 1
                    yield business
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            self._record(len(candidates), returned)

    async def _fetch_business(
        self, client: httpx.AsyncClient, candidate: PlaceCandidate
    ) -> Optional[Business]:
        async with self._semaphore:
            try:
                details = await self.places.place_details(client, candidate.place_id)
            except Exception as e:
                logger.warning(
                    f"Details fetch failed for {candidate.name} ({candidate.place_id}): {e}"
                )
                return None

        website = (details.get("website") or "").strip()
        if not website:
            logger.debug(f"Dropping {candidate.name}: no website")
            return None

        return self._to_business(candidate, details, website)

    def _to_business(
        self, candidate: PlaceCandidate, details: dict, website: str
    ) -> Business:
        types = details.get("types") or candidate.types
        phone = (
            details.get("formatted_phone_number")
            or details.get("international_phone_number")
            or ""
        )
        return Business(
            id=candidate.place_id,
            name=details.get("name") or candidate.name,
            address=details.get("formatted_address") or candidate.formatted_address,
            location=candidate.location,
            contact=Contact(phone=phone, website=website),
            photos=[self.places.photo_url(ref) for ref in candidate.photo_references],
            type=category_for(types),
            has_event_space=has_event_space(types),
        )

    def _record(self, candidates_found: int, returned: int) -> None:
        self.last_summary = SearchSummary(
            candidates_found=candidates_found,
            businesses_returned=returned,
            filtered_out=candidates_found - returned,
        )
        if self.last_summary.filtered_out:
            logger.info(
                f"{self.last_summary.filtered_out} of {candidates_found} candidates "
                f"filtered out (no website or details unavailable)"
            )
