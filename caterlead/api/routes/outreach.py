"""Outreach template cache API route."""

from fastapi import APIRouter, Query

from caterlead.services.templates.cache import CacheStatus, template_cache

router = APIRouter(prefix="/api/outreach", tags=["outreach"])


@router.get("/cached-status", response_model=CacheStatus, response_model_by_alias=True)
async def cached_status(category: str = Query(..., min_length=1)):
    """Whether fresh templates are cached for a category."""
    return template_cache.status(category)
