"""Named workflow dispatch with a uniform result envelope."""

from .dispatcher import Workflow, WorkflowDispatcher
from .exceptions import WorkflowError, WorkflowInputError, WorkflowNotFoundError
from .models import (
    BusinessSearchInput,
    LeadIdsInput,
    LeadObjectsInput,
    OutreachTemplatesInput,
    WorkflowResult,
)

__all__ = [
    "BusinessSearchInput",
    "LeadIdsInput",
    "LeadObjectsInput",
    "OutreachTemplatesInput",
    "Workflow",
    "WorkflowDispatcher",
    "WorkflowError",
    "WorkflowInputError",
    "WorkflowNotFoundError",
    "WorkflowResult",
]
