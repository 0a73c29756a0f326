import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from caterlead.services.places import flows
from caterlead.services.places.models import Business, Contact


@pytest.mark.unit
class TestBusinessSearchFlow:
    @pytest.mark.asyncio
    async def test_task_returns_wire_dicts(self):
        gateway = MagicMock()
        gateway.search = AsyncMock(
            return_value=[
                Business(id="p1", name="Hall", contact=Contact(website="https://hall.example"))
            ]
        )

        with patch.object(flows, "PlaceSearchGateway", return_value=gateway):
            result = await flows.search_businesses_task.fn("venues", "Austin, TX", 10)

        gateway.search.assert_awaited_once_with("venues", "Austin, TX", 10)
        assert result[0]["id"] == "p1"
        assert "hasEventSpace" in result[0]

    @pytest.mark.asyncio
    async def test_flow_summarises(self):
        with patch.object(
            flows,
            "search_businesses_task",
            new_callable=AsyncMock,
            return_value=[{"id": "p1"}, {"id": "p2"}],
        ):
            result = await flows.business_search_flow.fn("venues", "1,1", 5)

        assert result["count"] == 2
        assert result["query"] == "venues"
        assert result["location"] == "1,1"
