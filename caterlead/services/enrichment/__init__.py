"""Lead enrichment service module."""

from .exceptions import (
    EnrichmentAPIError,
    EnrichmentError,
    EnrichmentTimeoutError,
    LeadNotFoundError,
)
from .models import BatchEnrichmentResult, EnrichmentData, EnrichmentOutcome, Lead
from .service import BatchEnrichmentOrchestrator, EnrichmentService, IService

__all__ = [
    "BatchEnrichmentOrchestrator",
    "BatchEnrichmentResult",
    "EnrichmentAPIError",
    "EnrichmentData",
    "EnrichmentError",
    "EnrichmentOutcome",
    "EnrichmentService",
    "EnrichmentTimeoutError",
    "IService",
    "Lead",
    "LeadNotFoundError",
]
