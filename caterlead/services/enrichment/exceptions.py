"""Custom exceptions for the lead enrichment service."""


class EnrichmentError(Exception):
    """Base exception for all enrichment-related errors."""

    pass


class EnrichmentAPIError(EnrichmentError):
    """Raised when the enrichment provider rejects a job or reports a failure."""

    pass


class EnrichmentTimeoutError(EnrichmentError):
    """Raised when an enrichment job does not finish within the allowed poll attempts."""

    pass


class LeadNotFoundError(EnrichmentError):
    """Raised when a requested lead does not exist in the lead store."""

    def __init__(self, lead_ids: list[str]):
        self.lead_ids = lead_ids
        super().__init__(f"Leads not found: {', '.join(lead_ids)}")
