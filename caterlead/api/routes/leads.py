"""Lead search and enrichment API routes."""

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import StreamingResponse
from loguru import logger

from caterlead.api.models.leads import (
    BatchEnrichRequest,
    BatchEnrichResponse,
    ErrorResponse,
    SearchResponse,
)
from caterlead.config import settings
from caterlead.services.enrichment.exceptions import LeadNotFoundError
from caterlead.services.enrichment.service import BatchEnrichmentOrchestrator
from caterlead.services.places.exceptions import PlacesError
from caterlead.services.places.gateway import PlaceSearchGateway
from caterlead.services.streaming.events import NDJSON_MEDIA_TYPE, encode_stream
from caterlead.services.streaming.producer import stream_search

router = APIRouter(prefix="/api/leads", tags=["leads"])


def _get_gateway() -> PlaceSearchGateway:
    return PlaceSearchGateway()


def _get_orchestrator() -> BatchEnrichmentOrchestrator:
    return BatchEnrichmentOrchestrator()


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


@router.get(
    "/search",
    response_model=SearchResponse,
    response_model_by_alias=True,
    responses={400: {"model": ErrorResponse, "description": "Location or search failed"}},
)
async def search_leads(
    query: str = Query(..., min_length=1),
    location: str = Query(..., min_length=1),
    radius: float = Query(settings.default_radius_miles, gt=0),
):
    """Find businesses with a website near a location."""
    gateway = _get_gateway()
    try:
        businesses = await gateway.search(query, location, radius)
    except PlacesError as e:
        raise HTTPException(
            status_code=400,
            detail={"error": "SEARCH_FAILED", "message": str(e)},
        )

    return SearchResponse(
        count=len(businesses),
        results=businesses,
        filtered_out=gateway.last_summary.filtered_out,
    )


@router.get("/streaming")
async def stream_leads(
    query: str = Query(..., min_length=1),
    location: str = Query(..., min_length=1),
    radius: float = Query(settings.default_radius_miles, gt=0),
):
    """Stream search progress and results as newline-delimited JSON."""
    gateway = _get_gateway()
    return StreamingResponse(
        encode_stream(stream_search(gateway, query, location, radius)),
        media_type=NDJSON_MEDIA_TYPE,
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


# ---------------------------------------------------------------------------
# Enrichment
# ---------------------------------------------------------------------------


@router.post(
    "/enrich/batch",
    response_model=BatchEnrichResponse,
    response_model_by_alias=True,
    responses={
        400: {"model": ErrorResponse, "description": "No lead ids"},
        404: {"model": ErrorResponse, "description": "Leads not found"},
    },
)
async def enrich_batch(request: BatchEnrichRequest):
    """Enrich saved leads one at a time."""
    if not request.lead_ids:
        raise HTTPException(
            status_code=400,
            detail={"error": "BAD_REQUEST", "message": "No leads to enrich"},
        )

    logger.info(f"Batch enrichment requested for {len(request.lead_ids)} leads")
    try:
        result = await _get_orchestrator().enrich_leads(request.lead_ids)
    except LeadNotFoundError as e:
        raise HTTPException(
            status_code=404,
            detail={"error": "NOT_FOUND", "message": str(e)},
        )

    return BatchEnrichResponse(
        **result.model_dump(),
        message=f"Batch processing complete. {result.summary}",
    )
