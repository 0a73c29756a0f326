"""Outreach template caching."""

from .cache import CacheStatus, CateringProfile, TemplateCache, cache_key, template_cache
from .service import TemplateService

__all__ = [
    "CacheStatus",
    "CateringProfile",
    "TemplateCache",
    "TemplateService",
    "cache_key",
    "template_cache",
]
