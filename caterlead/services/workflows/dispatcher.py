"""Single entry point that runs a named workflow and wraps the outcome.

Each workflow name maps to one input model and one handler. The payload is
validated against the input model before the handler runs, and every failure
is turned into a ``WorkflowResult`` with ``success=False``.
"""

import traceback
from typing import Any, Awaitable, Callable, NamedTuple, Optional

from loguru import logger
from pydantic import TypeAdapter

from caterlead.config import settings
from caterlead.services.enrichment.service import BatchEnrichmentOrchestrator
from caterlead.services.places.gateway import PlaceSearchGateway
from caterlead.services.streaming.events import CompleteEvent, ErrorEvent
from caterlead.services.streaming.producer import stream_search
from caterlead.services.templates.cache import CateringProfile, normalize_category
from caterlead.services.templates.service import TemplateGenerator, TemplateService
from caterlead.services.workflows.exceptions import WorkflowError, WorkflowNotFoundError
from caterlead.services.workflows.models import (
    BusinessSearchInput,
    LeadEnrichmentInput,
    OutreachTemplatesInput,
    WorkflowResult,
    business_search_input,
    lead_enrichment_input,
    outreach_templates_input,
)


class Workflow(NamedTuple):
    input: TypeAdapter
    handler: Callable[[Any], Awaitable[Any]]


class WorkflowDispatcher:
    def __init__(
        self,
        gateway_factory: Callable[[], PlaceSearchGateway] = PlaceSearchGateway,
        orchestrator_factory: Callable[[], BatchEnrichmentOrchestrator] = BatchEnrichmentOrchestrator,
        template_service_factory: Callable[[], TemplateService] = TemplateService,
        template_generator: Optional[TemplateGenerator] = None,
    ):
        self._gateway_factory = gateway_factory
        self._orchestrator_factory = orchestrator_factory
        self._template_service_factory = template_service_factory
        self._template_generator = template_generator
        self._workflows: dict[str, Workflow] = {
            "business-search": Workflow(business_search_input, self._business_search),
            "business-search-streaming": Workflow(
                business_search_input, self._business_search_streaming
            ),
            "lead-enrichment": Workflow(lead_enrichment_input, self._lead_enrichment),
            "lead-enrichment-direct": Workflow(lead_enrichment_input, self._lead_enrichment),
            "outreach-templates": Workflow(outreach_templates_input, self._outreach_templates),
        }

    @property
    def names(self) -> list[str]:
        return sorted(self._workflows)

    async def execute(self, name: str, payload: Optional[dict] = None) -> WorkflowResult:
        """Run ``name`` with ``payload``.

        Handlers return plain data for a successful run, or a ``WorkflowResult``
        when the run completed but must be reported as failed.
        """
        logger.info(f"Executing workflow: {name}")
        try:
            workflow = self._workflows.get(name)
            if workflow is None:
                raise WorkflowNotFoundError(name)

            params = workflow.input.validate_python(payload or {})
            outcome = await workflow.handler(params)
        except Exception as e:
            logger.error(f"Error executing workflow {name}: {e}")
            return WorkflowResult(
                success=False,
                error=str(e),
                stack=traceback.format_exc() if settings.debug else None,
            )

        if isinstance(outcome, WorkflowResult):
            if not outcome.success:
                logger.warning(f"Workflow {name} completed with failures: {outcome.error}")
            return outcome
        return WorkflowResult(success=True, data=outcome)

    async def _business_search(self, params: BusinessSearchInput) -> dict:
        gateway = self._gateway_factory()
        businesses = await gateway.search(params.query, params.location, params.radius)
        return {
            "businesses": [b.to_wire() for b in businesses],
            "count": len(businesses),
            "query": params.query,
            "location": params.location,
            "filteredOut": gateway.last_summary.filtered_out,
        }

    async def _business_search_streaming(self, params: BusinessSearchInput) -> dict:
        gateway = self._gateway_factory()
        events = []
        async for event in stream_search(
            gateway, params.query, params.location, params.radius
        ):
            events.append(event)

        terminal = events[-1]
        if isinstance(terminal, ErrorEvent):
            raise WorkflowError(terminal.error)
        if not isinstance(terminal, CompleteEvent):
            raise WorkflowError("Search stream ended without a result")

        return {
            "events": [e.model_dump(mode="json", by_alias=True, exclude_none=True) for e in events],
            "businesses": [b.to_wire() for b in terminal.results],
        }

    async def _lead_enrichment(self, params: LeadEnrichmentInput) -> WorkflowResult:
        lead_ids = params.resolve_lead_ids()
        orchestrator = self._orchestrator_factory()
        result = await orchestrator.enrich_leads(lead_ids)
        data = result.model_dump(mode="json", by_alias=True)
        if result.success:
            return WorkflowResult(success=True, data=data)
        return WorkflowResult(
            success=False,
            error=result.errors[0] if result.errors else result.summary,
            data=data,
        )

    async def _outreach_templates(self, params: OutreachTemplatesInput) -> dict:
        service = self._template_service_factory()
        generate = self._template_generator or _generator_missing
        templates = await service.get_templates(params.category, generate, params.profile)
        return {
            "category": normalize_category(params.category),
            "templates": templates,
        }


async def _generator_missing(
    category: str, profile: Optional[CateringProfile]
) -> list[str]:
    raise WorkflowError(
        f'No cached templates for "{category}" and no template generator configured'
    )
