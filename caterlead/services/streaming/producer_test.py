"""Unit tests for the streaming search producer."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from caterlead.services.places.exceptions import PlacesAPIError
from caterlead.services.places.gateway import PlaceSearchGateway
from caterlead.services.places.models import Coordinates, PlaceCandidate
from caterlead.services.streaming.consumer import StreamConsumer
from caterlead.services.streaming.events import (
    BusinessEvent,
    CompleteEvent,
    ErrorEvent,
    ProgressEvent,
    encode_event,
)
from caterlead.services.streaming.producer import stream_search


def _gateway(details_by_id):
    candidates = [
        PlaceCandidate(place_id=pid, name=pid.upper()) for pid in details_by_id
    ]
    places = MagicMock()
    places.geocode = AsyncMock(return_value=Coordinates(lat=1, lng=1))
    places.text_search = AsyncMock(return_value=candidates)
    places.place_details = AsyncMock(
        side_effect=lambda client, place_id: details_by_id[place_id]
    )
    places.photo_url = MagicMock(side_effect=lambda ref: ref)
    return PlaceSearchGateway(places=places, max_concurrency=2, timeout=5)


async def _collect(events):
    return [e async for e in events]


@pytest.mark.unit
class TestStreamSearch:
    @pytest.mark.asyncio
    async def test_event_sequence(self):
        gateway = _gateway(
            {
                "p1": {"website": "https://one.example"},
                "p2": {},
                "p3": {"website": "https://three.example"},
            }
        )

        events = await _collect(stream_search(gateway, "venues", "1,1", 10))

        assert isinstance(events[0], ProgressEvent)
        assert events[0].step == "geocode"
        assert events[1].step == "search"
        assert events[1].count == 3

        business_events = [e for e in events if isinstance(e, BusinessEvent)]
        assert len(business_events) == 2

        details = [e for e in events if isinstance(e, ProgressEvent) and e.step == "details"]
        assert [d.count for d in details] == [1, 2]
        assert all(d.total == 3 for d in details)

        terminal = events[-1]
        assert isinstance(terminal, CompleteEvent)
        assert sorted(b.id for b in terminal.results) == ["p1", "p3"]
        assert "1 filtered out" in terminal.message
        assert sum(isinstance(e, (CompleteEvent, ErrorEvent)) for e in events) == 1

    @pytest.mark.asyncio
    async def test_each_business_followed_by_progress(self):
        gateway = _gateway({"p1": {"website": "https://one.example"}})

        events = await _collect(stream_search(gateway, "venues", "1,1"))

        idx = next(i for i, e in enumerate(events) if isinstance(e, BusinessEvent))
        assert isinstance(events[idx + 1], ProgressEvent)
        assert events[idx + 1].step == "details"

    @pytest.mark.asyncio
    async def test_failure_yields_single_error_event(self):
        gateway = _gateway({})
        gateway.places.text_search = AsyncMock(side_effect=PlacesAPIError("REQUEST_DENIED"))

        events = await _collect(stream_search(gateway, "venues", "1,1"))

        assert [type(e) for e in events] == [ProgressEvent, ErrorEvent]
        assert "REQUEST_DENIED" in events[-1].error

    @pytest.mark.asyncio
    async def test_empty_search_completes(self):
        gateway = _gateway({})

        events = await _collect(stream_search(gateway, "venues", "1,1"))

        assert isinstance(events[-1], CompleteEvent)
        assert events[-1].results == []

    @pytest.mark.asyncio
    async def test_round_trip_through_consumer(self):
        gateway = _gateway(
            {
                "p1": {"website": "https://one.example"},
                "p2": {"website": "https://two.example"},
            }
        )
        consumer = StreamConsumer()

        async for event in stream_search(gateway, "venues", "1,1"):
            consumer.feed(encode_event(event).encode("utf-8"))

        assert consumer.succeeded
        assert sorted(b.id for b in consumer.businesses) == ["p1", "p2"]
