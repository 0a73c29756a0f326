"""Workflow entry point for business search.

Usage:
    python caterlead/workflows/business_search.py
"""

import asyncio

from caterlead.config import settings
from caterlead.services.places.flows import business_search_flow

settings.configure_logging()


async def main():
    result = await business_search_flow(
        query="wedding venues",
        location="Austin, TX",
        radius_miles=15,
    )
    print(f"Found {result['count']} businesses for '{result['query']}'")
    for business in result["businesses"]:
        print(f"  {business['name']}: {business['contact']['website']}")


if __name__ == "__main__":
    asyncio.run(main())
