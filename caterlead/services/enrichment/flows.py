"""Prefect flows for batch lead enrichment."""

from loguru import logger
from prefect import flow, task

from caterlead.db.db import close_pool
from caterlead.services.enrichment.service import BatchEnrichmentOrchestrator


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


@task(log_prints=True)
async def enrich_leads_task(lead_ids: list[str], delay: float | None = None) -> dict:
    """Enrich the given saved leads sequentially."""
    orchestrator = BatchEnrichmentOrchestrator(delay=delay)
    result = await orchestrator.enrich_leads(lead_ids)
    return result.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Flows
# ---------------------------------------------------------------------------


@flow(name="enrich-leads", log_prints=True)
async def enrich_leads_flow(lead_ids: list[str], delay: float | None = None) -> dict:
    """Enrich saved leads by id.

    Args:
        lead_ids: Ids of saved leads to enrich
        delay: Seconds between lead starts (defaults to settings)
    """
    try:
        logger.info(f"Enriching {len(lead_ids)} leads")
        result = await enrich_leads_task(lead_ids, delay=delay)
        logger.info(
            f"Enrichment flow done: {result['succeeded']} succeeded, "
            f"{result['failed']} failed, {result['emailsFound']} emails found"
        )
        return result
    finally:
        await close_pool()
