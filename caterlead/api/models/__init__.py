from .leads import (
    BatchEnrichRequest,
    BatchEnrichResponse,
    ErrorResponse,
    SearchResponse,
)

__all__ = [
    "BatchEnrichRequest",
    "BatchEnrichResponse",
    "ErrorResponse",
    "SearchResponse",
]
