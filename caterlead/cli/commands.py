import asyncio
import json
from typing import Optional

import httpx
import typer

from caterlead.db.db import close_pool
from caterlead.services.enrichment.service import BatchEnrichmentOrchestrator
from caterlead.services.places.gateway import PlaceSearchGateway
from caterlead.services.streaming.consumer import consume_search
from caterlead.services.streaming.events import encode_event
from caterlead.services.streaming.producer import stream_search

app = typer.Typer()


@app.command()
def search(
    query: str = typer.Argument(..., help="What to search for, e.g. 'wedding venues'"),
    location: str = typer.Argument(..., help="Free-text address or 'lat,lng'"),
    radius: float = typer.Option(25.0, "--radius", "-r", help="Search radius in miles"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
):
    """
    Find businesses with a website near a location.

    Examples:
        caterlead search "wedding venues" "Austin, TX"

        caterlead search "banquet hall" "30.2672,-97.7431" --radius 5 --json
    """

    async def run():
        gateway = PlaceSearchGateway()
        businesses = await gateway.search(query, location, radius)

        if as_json:
            print(json.dumps([b.to_wire() for b in businesses], indent=2))
            return

        for b in businesses:
            marker = " [event space]" if b.has_event_space else ""
            print(f"{b.name} ({b.type}){marker}")
            print(f"  {b.address}")
            print(f"  {b.contact.website}  {b.contact.phone}")
        summary = gateway.last_summary
        print(
            f"{len(businesses)} businesses, "
            f"{summary.filtered_out} of {summary.candidates_found} candidates filtered out"
        )

    asyncio.run(run())


@app.command("stream-search")
def stream_search_cmd(
    query: str = typer.Argument(..., help="What to search for"),
    location: str = typer.Argument(..., help="Free-text address or 'lat,lng'"),
    radius: float = typer.Option(25.0, "--radius", "-r", help="Search radius in miles"),
    url: Optional[str] = typer.Option(
        None, "--url", help="Read from a running API instead of searching locally"
    ),
):
    """Print a search as newline-delimited JSON events while it runs."""

    async def run():
        if url:
            async with httpx.AsyncClient(timeout=None) as client:
                consumer = await consume_search(
                    client,
                    f"{url.rstrip('/')}/api/leads/streaming",
                    {"query": query, "location": location, "radius": radius},
                )
            if consumer.error:
                print(f"Search failed: {consumer.error}")
                raise typer.Exit(code=1)
            for b in consumer.businesses:
                print(f"{b.name}: {b.contact.website}")
            return

        gateway = PlaceSearchGateway()
        async for event in stream_search(gateway, query, location, radius):
            print(encode_event(event), end="", flush=True)

    asyncio.run(run())


@app.command()
def enrich(
    lead_ids: list[str] = typer.Argument(..., help="Saved lead ids to enrich"),
    delay: Optional[float] = typer.Option(
        None, "--delay", "-d", help="Seconds between lead starts"
    ),
):
    """Enrich saved leads one at a time and print the batch summary."""

    async def run():
        try:
            orchestrator = BatchEnrichmentOrchestrator(delay=delay)
            result = await orchestrator.enrich_leads(lead_ids)
            print(result.summary)
            for error in result.errors:
                print(f"  {error}")
        finally:
            await close_pool()

    asyncio.run(run())
