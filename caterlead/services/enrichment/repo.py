"""Lead store access for enrichment.

Database errors (asyncpg.PostgresError) on writes are operational failures:
they are logged and reported through the return value. Reads propagate them
to the caller.
"""

import json
from typing import Any, Optional

import asyncpg
from loguru import logger

from caterlead.db.db import get_pool
from caterlead.db.sql_loader import lead_queries as queries
from caterlead.services.enrichment.models import EnrichmentData, Lead


def safe_enrichment_data(data: EnrichmentData) -> dict[str, Any]:
    """Flatten enrichment data for storage.

    ``lastUpdated`` is dropped; nested objects and non-string lists are stored
    as JSON strings.
    """
    safe = data.model_dump(mode="json", by_alias=True)
    safe.pop("lastUpdated", None)

    for key, value in safe.items():
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            continue
        if isinstance(value, (dict, list)):
            safe[key] = json.dumps(value)
    return safe


async def get_leads_by_ids(lead_ids: list[str]) -> list[Lead]:
    """Fetch leads in the order of ``lead_ids``. Unknown ids are skipped."""
    if not lead_ids:
        return []

    pool = await get_pool()
    async with pool.acquire() as conn:
        rows = await queries.get_leads_by_ids(conn, lead_ids=lead_ids)

    by_id = {str(row["id"]): Lead.model_validate(dict(row)) for row in rows}
    missing = [lead_id for lead_id in lead_ids if lead_id not in by_id]
    if missing:
        logger.warning(f"{len(missing)} lead(s) not found: {missing}")
    return [by_id[lead_id] for lead_id in lead_ids if lead_id in by_id]


async def save_enrichment(lead: Lead, data: EnrichmentData) -> tuple[bool, Optional[str]]:
    """Store enrichment on the lead, falling back to a status-only update.

    Returns (success, error message).
    """
    pool = await get_pool()
    async with pool.acquire() as conn:
        try:
            await queries.update_lead_enrichment(
                conn,
                lead_id=lead.id,
                enrichment_data=safe_enrichment_data(data),
                lead_score=data.lead_score.score,
                lead_score_label=data.lead_score.potential,
                contact_email=data.event_manager_email,
                contact_name=data.event_manager_name,
                contact_phone=data.event_manager_phone,
                website_url=lead.website or data.website,
            )
            logger.info(f"Saved enrichment for lead {lead.id}")
            return True, None
        except asyncpg.PostgresError as e:
            logger.error(f"Database error saving enrichment for lead {lead.id}: {e}")

        try:
            await queries.mark_lead_enriched(conn, lead_id=lead.id)
            logger.warning(f"Lead {lead.id} marked enriched without enrichment data")
            return True, None
        except asyncpg.PostgresError as e:
            logger.error(f"Fallback update failed for lead {lead.id}: {e}")
            return False, str(e)
