"""Cached access to generated outreach templates."""

from typing import Awaitable, Callable, Optional

from loguru import logger

from caterlead.services.templates.cache import (
    CateringProfile,
    TemplateCache,
    normalize_category,
    template_cache,
)

TemplateGenerator = Callable[[str, Optional[CateringProfile]], Awaitable[list[str]]]


class TemplateService:
    """Returns cached templates for a category or generates and caches them.

    Template content comes from ``generate``; a failed generation is not
    cached and the error propagates.
    """

    def __init__(self, cache: Optional[TemplateCache] = None):
        self.cache = cache if cache is not None else template_cache

    async def get_templates(
        self,
        category: str,
        generate: TemplateGenerator,
        profile: Optional[CateringProfile] = None,
    ) -> list[str]:
        normalized = normalize_category(category)

        cached = self.cache.get(normalized, profile)
        if cached is not None:
            logger.info(f"Using cached templates for {normalized}")
            return cached

        logger.info(f"Generating fresh templates for {normalized}")
        templates = await generate(normalized, profile)
        self.cache.put(normalized, templates, profile)
        return templates
