import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from caterlead.db import db


@pytest.fixture(autouse=True)
def reset_pool():
    db.pool = None
    yield
    db.pool = None


@pytest.mark.unit
class TestPool:
    @pytest.mark.asyncio
    async def test_init_pool_is_lazy_singleton(self):
        fake_pool = MagicMock()
        with patch(
            "caterlead.db.db.asyncpg.create_pool", new_callable=AsyncMock
        ) as create_pool:
            create_pool.return_value = fake_pool

            first = await db.get_pool()
            second = await db.get_pool()

        assert first is second is fake_pool
        create_pool.assert_awaited_once()
        kwargs = create_pool.call_args.kwargs
        assert kwargs["min_size"] == db.settings.database_pool_min
        assert kwargs["max_size"] == db.settings.database_pool_max

    @pytest.mark.asyncio
    async def test_close_pool(self):
        fake_pool = MagicMock()
        fake_pool.close = AsyncMock()
        db.pool = fake_pool

        await db.close_pool()

        fake_pool.close.assert_awaited_once()
        assert db.pool is None

    @pytest.mark.asyncio
    async def test_jsonb_codec_registered(self):
        conn = MagicMock()
        conn.set_type_codec = AsyncMock()

        await db._init_connection(conn)

        args, kwargs = conn.set_type_codec.call_args
        assert args[0] == "jsonb"
        assert kwargs["decoder"]('{"a": 1}') == {"a": 1}


@pytest.mark.unit
class TestLeadQueries:
    def test_queries_load_from_sql_files(self):
        from caterlead.db.sql_loader import lead_queries

        assert {
            "get_leads_by_ids",
            "update_lead_enrichment",
            "mark_lead_enriched",
        } <= set(lead_queries.available_queries)


@pytest.mark.asyncio
async def test_leads_query_against_real_db(db_pool):
    if db_pool is None:
        pytest.skip("need --use-real-db option to run")

    from caterlead.db.sql_loader import lead_queries

    async with db_pool.acquire() as conn:
        rows = await lead_queries.get_leads_by_ids(conn, lead_ids=["does-not-exist"])

    assert list(rows) == []
