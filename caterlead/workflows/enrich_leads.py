"""Lead enrichment workflow entrypoint.

Enriches saved leads through the website enrichment job service, one lead
at a time.

Usage:
    python caterlead/workflows/enrich_leads.py <lead-id> [<lead-id> ...]
"""

import asyncio
import sys

from loguru import logger

from caterlead.config import settings
from caterlead.services.enrichment.flows import enrich_leads_flow

settings.configure_logging()

if __name__ == "__main__":
    lead_ids = sys.argv[1:]
    if not lead_ids:
        print("ERROR: pass at least one lead id")
        sys.exit(1)

    result = asyncio.run(enrich_leads_flow(lead_ids))
    logger.info(f"Enrichment complete: {result}")
