"""Workflow dispatch API route."""

from typing import Any, Optional

from fastapi import APIRouter, Body

from caterlead.services.workflows.dispatcher import WorkflowDispatcher

router = APIRouter(prefix="/api/workflows", tags=["workflows"])


def _get_dispatcher() -> WorkflowDispatcher:
    return WorkflowDispatcher()


@router.post("/{name}")
async def run_workflow(name: str, payload: Optional[dict[str, Any]] = Body(None)):
    """Run a named workflow. Failures are reported in the envelope, not as HTTP errors."""
    result = await _get_dispatcher().execute(name, payload)
    return result.to_wire()
