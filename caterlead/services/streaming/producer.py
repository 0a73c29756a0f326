"""Turns a place search into a sequence of stream events."""

from typing import AsyncIterator, Union

from loguru import logger

from caterlead.services.places.gateway import PlaceSearchGateway
from caterlead.services.places.models import Business, Coordinates
from caterlead.services.streaming.events import (
    BusinessEvent,
    CompleteEvent,
    ErrorEvent,
    ProgressEvent,
    StreamEvent,
)


async def stream_search(
    gateway: PlaceSearchGateway,
    query: str,
    location: Union[str, Coordinates],
    radius_miles: float = 25.0,
) -> AsyncIterator[StreamEvent]:
    """Yield progress, one event per business and exactly one terminal event.

    Any failure ends the stream with a single ``error`` event.
    """
    businesses: list[Business] = []
    try:
        async with gateway.open_client() as client:
            yield ProgressEvent(step="geocode", message=f"Resolving location '{location}'")
            coords = await gateway.resolve_location(client, location)

            candidates = await gateway.find_candidates(client, query, coords, radius_miles)
            total = len(candidates)
            yield ProgressEvent(
                step="search", message=f"Found {total} candidates", count=total
            )

            async for business in gateway.iter_businesses(client, candidates):
                businesses.append(business)
                yield BusinessEvent(data=business)
                yield ProgressEvent(
                    step="details",
                    message=f"Fetched details for {business.name}",
                    count=len(businesses),
                    total=total,
                )
    except Exception as e:
        logger.error(f"Streaming search '{query}' failed: {e}")
        yield ErrorEvent(error=str(e))
        return

    summary = gateway.last_summary
    message = f"Found {len(businesses)} businesses with websites"
    if summary.filtered_out:
        message += f" ({summary.filtered_out} filtered out)"
    yield CompleteEvent(results=businesses, message=message)
