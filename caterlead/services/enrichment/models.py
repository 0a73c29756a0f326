"""Pydantic models for lead enrichment."""

from datetime import datetime, timezone
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Lead(BaseModel):
    """A saved lead as read from the lead store."""

    id: str
    name: str
    address: Optional[str] = ""
    phone: Optional[str] = ""
    website: Optional[str] = ""
    email: Optional[str] = None
    enrichment_data: Optional[dict[str, Any]] = None


class LeadScore(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    score: int = 50
    reasons: list[str] = []
    potential: Literal["high", "medium", "low"] = "medium"
    last_calculated: datetime = Field(default_factory=_now)

    @staticmethod
    def potential_for(score: int) -> str:
        if score >= 70:
            return "high"
        if score >= 40:
            return "medium"
        return "low"


class EnrichmentData(BaseModel):
    """Venue facts extracted by the enrichment provider, stored on the lead."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    venue_name: Optional[str] = None
    ai_overview: Optional[str] = None
    event_manager_name: str = ""
    event_manager_email: str = ""
    event_manager_phone: str = ""
    common_event_types: list[str] = []
    venue_capacity: Optional[Union[int, str]] = None
    in_house_catering: bool = False
    amenities: list[str] = []
    pricing_information: str = ""
    preferred_caterers: list[str] = []
    website: Optional[str] = None
    lead_score: LeadScore = Field(default_factory=LeadScore)
    last_updated: datetime = Field(default_factory=_now)


class EnrichmentOutcome(BaseModel):
    """Result of enriching a single lead."""

    success: bool
    enrichment_data: Optional[EnrichmentData] = None
    email_found: bool = False
    error: Optional[str] = None


class EnrichedLead(BaseModel):
    id: str
    name: str
    enrichment_data: Optional[EnrichmentData] = None


class BatchEnrichmentResult(BaseModel):
    """Counters and per-lead results for one batch run."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    processed: int = 0
    succeeded: int = 0
    failed: int = 0
    emails_found: int = Field(0, alias="emailsFound")
    errors: list[str] = []
    enriched_leads: list[EnrichedLead] = Field(default_factory=list, alias="enrichedLeads")

    @property
    def summary(self) -> str:
        return (
            f"Processed: {self.processed}, Succeeded: {self.succeeded}, "
            f"Failed: {self.failed}, Emails found: {self.emails_found}"
        )
