"""Prefect flows for business search."""

from prefect import flow, task

from caterlead.services.places.gateway import PlaceSearchGateway


@task(log_prints=True)
async def search_businesses_task(
    query: str, location: str, radius_miles: float = 25.0
) -> list[dict]:
    """Run one place search and return wire-shaped businesses."""
    gateway = PlaceSearchGateway()
    businesses = await gateway.search(query, location, radius_miles)
    return [b.to_wire() for b in businesses]


@flow(name="business-search", log_prints=True)
async def business_search_flow(
    query: str,
    location: str,
    radius_miles: float = 25.0,
) -> dict:
    """Find businesses with a website near a location.

    Args:
        query: What to search for (e.g. 'wedding venues').
        location: Free-text address or 'lat,lng'.
        radius_miles: Search radius in miles.
    """
    businesses = await search_businesses_task(query, location, radius_miles)
    return {
        "query": query,
        "location": location,
        "count": len(businesses),
        "businesses": businesses,
    }
