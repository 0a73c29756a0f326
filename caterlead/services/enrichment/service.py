"""Lead enrichment: single-lead enrichment and paced batch runs."""

from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import urlparse

import httpx
from loguru import logger

from caterlead.config import settings
from caterlead.core.logging import log_execution_time
from caterlead.services.enrichment import repo
from caterlead.services.enrichment.client import EnrichmentClient
from caterlead.services.enrichment.exceptions import EnrichmentError, LeadNotFoundError
from caterlead.services.enrichment.models import (
    BatchEnrichmentResult,
    EnrichedLead,
    EnrichmentData,
    EnrichmentOutcome,
    Lead,
    LeadScore,
)
from caterlead.services.enrichment.rate_limiter import RateLimiter

NO_LEADS_ERROR = "No leads provided for batch processing"


def normalize_website(url: str) -> str:
    """Return the scheme and host of ``url``, defaulting to https."""
    url = url.strip()
    if "://" not in url:
        url = f"https://{url}"
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def format_enrichment(raw: dict, lead: Lead) -> EnrichmentData:
    """Map a raw provider result onto ``EnrichmentData``."""
    management = raw.get("management_contact") or {}
    contact_info = raw.get("contact_information") or {}
    score = int(raw.get("lead_score") or 50)
    reasoning = raw.get("lead_score_reasoning")

    return EnrichmentData(
        venue_name=raw.get("venue_name"),
        ai_overview=raw.get("aiOverview") or raw.get("venue_description"),
        event_manager_name=management.get("name") or contact_info.get("contact_person") or "",
        event_manager_email=management.get("email") or contact_info.get("email") or "",
        event_manager_phone=management.get("phone") or contact_info.get("phone") or "",
        common_event_types=raw.get("event_types_hosted") or [],
        venue_capacity=raw.get("venue_capacity"),
        in_house_catering=bool(raw.get("in_house_catering_availability")),
        amenities=raw.get("amenities_offered") or [],
        pricing_information=raw.get("pricing_information") or "",
        preferred_caterers=raw.get("preferred_caterers") or [],
        website=raw.get("website") or lead.website,
        lead_score=LeadScore(
            score=score,
            reasons=[reasoning] if reasoning else [],
            potential=LeadScore.potential_for(score),
        ),
    )


class IService(ABC):
    """Service interface for lead enrichment."""

    @abstractmethod
    async def enrich_lead(self, lead: Lead) -> EnrichmentOutcome:
        """Enrich one lead and persist the result."""
        ...


class EnrichmentService(IService):
    """Enriches a lead from its website through the enrichment job service."""

    def __init__(self, client: Optional[EnrichmentClient] = None):
        self.client = client or EnrichmentClient()

    async def enrich_lead(self, lead: Lead) -> EnrichmentOutcome:
        if not lead.website:
            return EnrichmentOutcome(success=False, error="Lead has no website URL")

        website = normalize_website(lead.website)
        logger.info(f"Enriching lead {lead.id}: {lead.name} ({website})")

        try:
            raw = await self.client.enrich_url(website)
        except (EnrichmentError, httpx.HTTPError) as e:
            logger.error(f"Error enriching lead {lead.name}: {e}")
            return EnrichmentOutcome(success=False, error=str(e))

        data = format_enrichment(raw, lead)
        saved, error = await repo.save_enrichment(lead, data)

        return EnrichmentOutcome(
            success=saved,
            enrichment_data=data,
            email_found=bool(data.event_manager_email),
            error=error,
        )


class BatchEnrichmentOrchestrator:
    """Enriches leads one at a time, isolating per-lead failures.

    Item starts are spaced by a rate limiter shared across the run, and the
    run waits out the last slot, so N leads take at least N * delay seconds.
    """

    def __init__(
        self,
        enrichment: Optional[IService] = None,
        delay: Optional[float] = None,
        limiter_factory=RateLimiter,
    ):
        self.enrichment = enrichment or EnrichmentService()
        self.delay = settings.enrichment_delay_seconds if delay is None else delay
        self._limiter_factory = limiter_factory

    @log_execution_time
    async def process(self, leads: list[Lead]) -> BatchEnrichmentResult:
        if not leads:
            return BatchEnrichmentResult(success=False, errors=[NO_LEADS_ERROR])

        logger.info(f"Starting batch enrichment for {len(leads)} leads")
        limiter = self._limiter_factory(self.delay)
        result = BatchEnrichmentResult()

        for index, lead in enumerate(leads, start=1):
            await limiter.acquire()
            logger.info(f"Processing lead {index}/{len(leads)}: {lead.name}")

            try:
                outcome = await self.enrichment.enrich_lead(lead)
            except Exception as e:
                result.processed += 1
                result.failed += 1
                message = f"Exception enriching lead {lead.name}: {e}"
                result.errors.append(message)
                logger.error(message)
                continue

            result.processed += 1
            if outcome.success:
                result.succeeded += 1
                result.enriched_leads.append(
                    EnrichedLead(
                        id=lead.id, name=lead.name, enrichment_data=outcome.enrichment_data
                    )
                )
                if outcome.email_found:
                    result.emails_found += 1
            else:
                result.failed += 1
                message = f"Failed to enrich lead {lead.name}: {outcome.error or 'Unknown error'}"
                result.errors.append(message)
                logger.error(message)

        await limiter.drain()
        result.success = result.failed == 0

        logger.info(f"Batch enrichment complete. {result.summary}")
        return result

    async def enrich_leads(self, lead_ids: list[str]) -> BatchEnrichmentResult:
        """Load leads by id from the lead store and process them."""
        leads = await repo.get_leads_by_ids(lead_ids)
        if lead_ids and not leads:
            raise LeadNotFoundError(lead_ids)
        return await self.process(leads)
