import os
from typing import Any, Dict, List, Optional, Protocol

import aiosql

query_dir = os.path.join(os.path.dirname(__file__), "query")


class LeadQueries(Protocol):
    """
    Protocol for lead SQL queries.
    Note: aiosql generates functions that accept **kwargs matching SQL :param names.
    """

    async def get_leads_by_ids(
        self, conn: Any, *, lead_ids: List[str]
    ) -> List[Dict[str, Any]]: ...

    async def update_lead_enrichment(
        self,
        conn: Any,
        *,
        lead_id: str,
        enrichment_data: Dict[str, Any],
        lead_score: Optional[int] = None,
        lead_score_label: Optional[str] = None,
        contact_email: Optional[str] = None,
        contact_name: Optional[str] = None,
        contact_phone: Optional[str] = None,
        website_url: Optional[str] = None,
    ) -> None: ...

    async def mark_lead_enriched(self, conn: Any, *, lead_id: str) -> None: ...


# asyncpg adapter turns :name parameters into $1, $2, ...
lead_queries: LeadQueries = aiosql.from_path(query_dir, "asyncpg")  # type: ignore
