"""Google Geocoding / Places web service client.

Endpoints used:
- Geocoding:    https://maps.googleapis.com/maps/api/geocode/json
- Text search:  https://maps.googleapis.com/maps/api/place/textsearch/json
- Details:      https://maps.googleapis.com/maps/api/place/details/json

Every method takes the ``httpx.AsyncClient`` to use so a whole search shares
one connection pool.
"""

import time
from typing import Optional
from urllib.parse import urlencode

import httpx
from loguru import logger
from pydantic import ValidationError

from caterlead.core.logging import log_http_request
from caterlead.services.places.exceptions import (
    LocationResolutionError,
    PlacesAPIError,
)
from caterlead.services.places.models import Coordinates, PlaceCandidate

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
TEXT_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/textsearch/json"
DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"
PHOTO_URL = "https://maps.googleapis.com/maps/api/place/photo"

METERS_PER_MILE = 1609
MAX_RADIUS_METERS = 50000
MAX_CANDIDATES = 20  # one provider page
PHOTO_MAX_WIDTH = 400

DETAIL_FIELDS = (
    "name",
    "formatted_address",
    "formatted_phone_number",
    "international_phone_number",
    "website",
    "types",
)


def radius_to_meters(radius_miles: float) -> int:
    return min(int(radius_miles * METERS_PER_MILE), MAX_RADIUS_METERS)


def _coordinates(place: dict) -> Optional[Coordinates]:
    """Coordinates from a provider result, or None when geometry is partial."""
    loc = (place.get("geometry") or {}).get("location") or {}
    lat, lng = loc.get("lat"), loc.get("lng")
    if lat is None or lng is None:
        return None
    try:
        return Coordinates(lat=lat, lng=lng)
    except ValidationError:
        return None


class GooglePlacesClient:
    """Thin async wrapper over the Google Maps web services."""

    def __init__(self, api_key: str):
        self.api_key = api_key
        self._api_calls = 0

    @property
    def api_calls(self) -> int:
        return self._api_calls

    async def _get(
        self, client: httpx.AsyncClient, url: str, params: dict
    ) -> dict:
        self._api_calls += 1
        start = time.monotonic()
        resp = await client.get(url, params={**params, "key": self.api_key})
        log_http_request(
            "GET", url, status_code=resp.status_code, duration=time.monotonic() - start
        )
        resp.raise_for_status()
        return resp.json()

    async def geocode(self, client: httpx.AsyncClient, address: str) -> Coordinates:
        """Resolve a free-text address to coordinates."""
        try:
            data = await self._get(client, GEOCODE_URL, {"address": address})
        except httpx.HTTPError as e:
            raise LocationResolutionError(
                f"Geocoding request failed for '{address}': {e}"
            ) from e

        status = data.get("status")
        results = data.get("results") or []
        if status != "OK" or not results:
            raise LocationResolutionError(
                f"Could not resolve location '{address}' (status={status})"
            )

        coords = _coordinates(results[0])
        if coords is None:
            raise LocationResolutionError(
                f"Geocoder returned no coordinates for '{address}'"
            )
        return coords

    async def text_search(
        self,
        client: httpx.AsyncClient,
        query: str,
        location: Coordinates,
        radius_miles: float,
    ) -> list[PlaceCandidate]:
        """Run one text search page around ``location``."""
        params = {
            "query": query,
            "location": str(location),
            "radius": radius_to_meters(radius_miles),
        }
        try:
            data = await self._get(client, TEXT_SEARCH_URL, params)
        except httpx.HTTPStatusError as e:
            raise PlacesAPIError(f"HTTP_{e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise PlacesAPIError("REQUEST_FAILED", str(e)) from e

        status = data.get("status")
        if status == "ZERO_RESULTS":
            return []
        if status != "OK":
            raise PlacesAPIError(status or "UNKNOWN", data.get("error_message"))

        candidates = []
        for place in (data.get("results") or [])[:MAX_CANDIDATES]:
            candidate = self._to_candidate(place)
            if candidate:
                candidates.append(candidate)
        return candidates

    async def place_details(
        self, client: httpx.AsyncClient, place_id: str
    ) -> dict:
        """Fetch contact details for one place. Raises on any non-OK answer."""
        data = await self._get(
            client,
            DETAILS_URL,
            {"place_id": place_id, "fields": ",".join(DETAIL_FIELDS)},
        )
        status = data.get("status")
        if status != "OK":
            raise PlacesAPIError(status or "UNKNOWN", data.get("error_message"))
        return data.get("result") or {}

    def photo_url(self, photo_reference: str) -> str:
        query = urlencode(
            {
                "maxwidth": PHOTO_MAX_WIDTH,
                "photoreference": photo_reference,
                "key": self.api_key,
            }
        )
        return f"{PHOTO_URL}?{query}"

    @staticmethod
    def _to_candidate(place: dict) -> Optional[PlaceCandidate]:
        place_id = place.get("place_id")
        if not place_id:
            logger.debug(f"Skipping place without place_id: {place.get('name')}")
            return None

        return PlaceCandidate(
            place_id=place_id,
            name=place.get("name", ""),
            formatted_address=place.get("formatted_address", ""),
            location=_coordinates(place),
            types=place.get("types") or [],
            photo_references=[
                p["photo_reference"]
                for p in place.get("photos") or []
                if p.get("photo_reference")
            ],
        )
