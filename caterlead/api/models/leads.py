"""Pydantic models for the leads API."""

from typing import Optional

from pydantic import BaseModel, Field

from caterlead.services.enrichment.models import BatchEnrichmentResult
from caterlead.services.places.models import Business


class ErrorResponse(BaseModel):
    error: str
    message: str


class SearchResponse(BaseModel):
    """GET /api/leads/search response."""

    success: bool = True
    count: int
    results: list[Business]
    filtered_out: int = Field(0, alias="filteredOut")

    model_config = {"populate_by_name": True}


class BatchEnrichRequest(BaseModel):
    """POST /api/leads/enrich/batch request body."""

    lead_ids: list[str] = Field(default_factory=list, alias="leadIds")

    model_config = {"populate_by_name": True}


class BatchEnrichResponse(BatchEnrichmentResult):
    """Batch result plus a human-readable summary."""

    message: Optional[str] = None
