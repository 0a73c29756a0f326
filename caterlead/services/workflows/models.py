"""Workflow payloads and the result envelope."""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from caterlead.services.templates.cache import CateringProfile
from caterlead.services.workflows.exceptions import WorkflowInputError

NO_VALID_LEAD_IDS = "No valid lead IDs provided for enrichment"


class BusinessSearchInput(BaseModel):
    query: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    radius: float = Field(25.0, gt=0)


class LeadIdsInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    lead_ids: list[str] = Field(default_factory=list, alias="leadIds")

    def resolve_lead_ids(self) -> list[str]:
        return self.lead_ids


class LeadRef(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None


class LeadObjectsInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    leads: list[LeadRef]

    def resolve_lead_ids(self) -> list[str]:
        lead_ids = [lead.id for lead in self.leads if lead.id]
        if not lead_ids:
            raise WorkflowInputError(NO_VALID_LEAD_IDS)
        return lead_ids


class OutreachTemplatesInput(BaseModel):
    category: str = Field(..., min_length=1)
    profile: Optional[CateringProfile] = None


LeadEnrichmentInput = Union[LeadIdsInput, LeadObjectsInput]

lead_enrichment_input = TypeAdapter(LeadEnrichmentInput)
business_search_input = TypeAdapter(BusinessSearchInput)
outreach_templates_input = TypeAdapter(OutreachTemplatesInput)


class WorkflowResult(BaseModel):
    """Uniform envelope returned by every workflow execution."""

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    stack: Optional[str] = None

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)
