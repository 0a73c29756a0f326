import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from caterlead.services.enrichment import flows
from caterlead.services.enrichment.models import BatchEnrichmentResult


@pytest.mark.unit
class TestEnrichLeadsFlow:
    @pytest.mark.asyncio
    async def test_task_runs_orchestrator(self):
        orchestrator = MagicMock()
        orchestrator.enrich_leads = AsyncMock(
            return_value=BatchEnrichmentResult(processed=1, succeeded=1, emails_found=1)
        )

        with patch.object(flows, "BatchEnrichmentOrchestrator", return_value=orchestrator) as cls:
            result = await flows.enrich_leads_task.fn(["a"], delay=0)

        cls.assert_called_once_with(delay=0)
        orchestrator.enrich_leads.assert_awaited_once_with(["a"])
        assert result["emailsFound"] == 1
        assert result["enrichedLeads"] == []

    @pytest.mark.asyncio
    async def test_flow_closes_pool(self):
        summary = {"succeeded": 2, "failed": 0, "emailsFound": 1}

        with patch.object(
            flows, "enrich_leads_task", new_callable=AsyncMock, return_value=summary
        ) as task, patch.object(flows, "close_pool", new_callable=AsyncMock) as close:
            result = await flows.enrich_leads_flow.fn(["a", "b"])

        task.assert_awaited_once_with(["a", "b"], delay=None)
        close.assert_awaited_once()
        assert result == summary

    @pytest.mark.asyncio
    async def test_flow_closes_pool_on_error(self):
        with patch.object(
            flows,
            "enrich_leads_task",
            new_callable=AsyncMock,
            side_effect=RuntimeError("db down"),
        ), patch.object(flows, "close_pool", new_callable=AsyncMock) as close:
            with pytest.raises(RuntimeError):
                await flows.enrich_leads_flow.fn(["a"])

        close.assert_awaited_once()
