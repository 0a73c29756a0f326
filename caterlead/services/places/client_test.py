"""Unit tests for GooglePlacesClient."""

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from caterlead.services.places.client import (
    DETAILS_URL,
    GEOCODE_URL,
    MAX_CANDIDATES,
    TEXT_SEARCH_URL,
    GooglePlacesClient,
    radius_to_meters,
)
from caterlead.services.places.exceptions import (
    LocationResolutionError,
    PlacesAPIError,
)
from caterlead.services.places.models import Coordinates


def _response(payload: dict, status_code: int = 200):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    resp.raise_for_status = MagicMock()
    return resp


def _client(*payloads):
    client = MagicMock()
    client.get = AsyncMock(side_effect=[_response(p) for p in payloads])
    return client


def _place(place_id: str, name: str = "Venue", **extra) -> dict:
    return {
        "place_id": place_id,
        "name": name,
        "formatted_address": "1 Main St",
        "geometry": {"location": {"lat": 37.7, "lng": -122.4}},
        "types": ["event_venue", "point_of_interest"],
        **extra,
    }


# ---------------------------------------------------------------------------
# radius conversion
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestRadius:
    def test_miles_to_meters(self):
        assert radius_to_meters(10) == 16090

    def test_clamped_to_provider_maximum(self):
        assert radius_to_meters(100) == 50000


# ---------------------------------------------------------------------------
# geocode
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestGeocode:
    @pytest.mark.asyncio
    async def test_geocode_ok(self):
        client = _client(
            {
                "status": "OK",
                "results": [{"geometry": {"location": {"lat": 30.26, "lng": -97.74}}}],
            }
        )
        places = GooglePlacesClient(api_key="k")

        coords = await places.geocode(client, "Austin, TX")

        assert coords == Coordinates(lat=30.26, lng=-97.74)
        url = client.get.call_args.args[0]
        params = client.get.call_args.kwargs["params"]
        assert url == GEOCODE_URL
        assert params == {"address": "Austin, TX", "key": "k"}
        assert places.api_calls == 1

    @pytest.mark.asyncio
    async def test_geocode_non_ok_status_raises(self):
        client = _client({"status": "REQUEST_DENIED", "results": []})
        places = GooglePlacesClient(api_key="k")

        with pytest.raises(LocationResolutionError):
            await places.geocode(client, "nowhere")

    @pytest.mark.asyncio
    async def test_geocode_empty_results_raises(self):
        client = _client({"status": "OK", "results": []})
        places = GooglePlacesClient(api_key="k")

        with pytest.raises(LocationResolutionError):
            await places.geocode(client, "nowhere")

    @pytest.mark.asyncio
    async def test_geocode_transport_error_raises(self):
        client = MagicMock()
        client.get = AsyncMock(side_effect=httpx.ConnectError("down"))
        places = GooglePlacesClient(api_key="k")

        with pytest.raises(LocationResolutionError):
            await places.geocode(client, "Austin")

    @pytest.mark.asyncio
    async def test_geocode_partial_geometry_raises(self):
        client = _client(
            {"status": "OK", "results": [{"geometry": {"location": {"lat": 30.26}}}]}
        )
        places = GooglePlacesClient(api_key="k")

        with pytest.raises(LocationResolutionError, match="no coordinates"):
            await places.geocode(client, "Austin")

    @pytest.mark.asyncio
    async def test_geocode_missing_geometry_raises(self):
        client = _client({"status": "OK", "results": [{"formatted_address": "Austin"}]})
        places = GooglePlacesClient(api_key="k")

        with pytest.raises(LocationResolutionError):
            await places.geocode(client, "Austin")


# ---------------------------------------------------------------------------
# text search
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestTextSearch:
    @pytest.mark.asyncio
    async def test_text_search_builds_candidates(self):
        client = _client(
            {
                "status": "OK",
                "results": [
                    _place("p1", photos=[{"photo_reference": "ref-1"}]),
                    _place("p2"),
                ],
            }
        )
        places = GooglePlacesClient(api_key="k")

        candidates = await places.text_search(
            client, "catering venues", Coordinates(lat=37.77, lng=-122.41), 10
        )

        assert [c.place_id for c in candidates] == ["p1", "p2"]
        assert candidates[0].photo_references == ["ref-1"]
        assert candidates[0].location == Coordinates(lat=37.7, lng=-122.4)
        assert client.get.call_args.args[0] == TEXT_SEARCH_URL
        params = client.get.call_args.kwargs["params"]
        assert params["location"] == "37.77,-122.41"
        assert params["radius"] == 16090

    @pytest.mark.asyncio
    async def test_zero_results_is_empty(self):
        client = _client({"status": "ZERO_RESULTS", "results": []})
        places = GooglePlacesClient(api_key="k")

        candidates = await places.text_search(
            client, "q", Coordinates(lat=0, lng=0), 5
        )

        assert candidates == []

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        client = _client(
            {"status": "OVER_QUERY_LIMIT", "error_message": "slow down"}
        )
        places = GooglePlacesClient(api_key="k")

        with pytest.raises(PlacesAPIError) as exc_info:
            await places.text_search(client, "q", Coordinates(lat=0, lng=0), 5)

        assert exc_info.value.status == "OVER_QUERY_LIMIT"
        assert "slow down" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_caps_at_one_page(self):
        client = _client(
            {"status": "OK", "results": [_place(f"p{i}") for i in range(25)]}
        )
        places = GooglePlacesClient(api_key="k")

        candidates = await places.text_search(
            client, "q", Coordinates(lat=0, lng=0), 5
        )

        assert len(candidates) == MAX_CANDIDATES

    @pytest.mark.asyncio
    async def test_skips_places_without_id(self):
        client = _client(
            {"status": "OK", "results": [{"name": "No id"}, _place("p1")]}
        )
        places = GooglePlacesClient(api_key="k")

        candidates = await places.text_search(
            client, "q", Coordinates(lat=0, lng=0), 5
        )

        assert [c.place_id for c in candidates] == ["p1"]

    @pytest.mark.asyncio
    async def test_partial_geometry_leaves_location_empty(self):
        client = _client(
            {
                "status": "OK",
                "results": [
                    _place("p1", geometry={"location": {"lng": -122.4}}),
                    _place("p2", geometry={}),
                ],
            }
        )
        places = GooglePlacesClient(api_key="k")

        candidates = await places.text_search(
            client, "q", Coordinates(lat=0, lng=0), 5
        )

        assert [c.place_id for c in candidates] == ["p1", "p2"]
        assert all(c.location is None for c in candidates)


# ---------------------------------------------------------------------------
# details / photos
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestDetails:
    @pytest.mark.asyncio
    async def test_details_ok(self):
        client = _client(
            {"status": "OK", "result": {"website": "https://venue.example"}}
        )
        places = GooglePlacesClient(api_key="k")

        details = await places.place_details(client, "p1")

        assert details == {"website": "https://venue.example"}
        assert client.get.call_args.args[0] == DETAILS_URL
        params = client.get.call_args.kwargs["params"]
        assert params["place_id"] == "p1"
        assert "website" in params["fields"].split(",")

    @pytest.mark.asyncio
    async def test_details_not_found_raises(self):
        client = _client({"status": "NOT_FOUND"})
        places = GooglePlacesClient(api_key="k")

        with pytest.raises(PlacesAPIError):
            await places.place_details(client, "gone")

    def test_photo_url(self):
        places = GooglePlacesClient(api_key="secret")
        url = places.photo_url("abc")
        assert url.startswith("https://maps.googleapis.com/maps/api/place/photo?")
        assert "maxwidth=400" in url
        assert "photoreference=abc" in url
        assert "key=secret" in url


# ---------------------------------------------------------------------------
# live API
# ---------------------------------------------------------------------------


@pytest.mark.online
class TestLivePlaces:
    @pytest.mark.asyncio
    async def test_geocode_and_search(self):
        from caterlead.config import settings

        if not settings.google_places_api_key:
            pytest.skip("GOOGLE_PLACES_API_KEY not set")

        places = GooglePlacesClient(api_key=settings.google_places_api_key)
        async with httpx.AsyncClient(timeout=30.0) as client:
            coords = await places.geocode(client, "Austin, TX")
            candidates = await places.text_search(client, "wedding venues", coords, 5)

        assert 30 < coords.lat < 31
        assert len(candidates) <= MAX_CANDIDATES
