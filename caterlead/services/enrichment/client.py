"""Client for the asynchronous website enrichment job service.

A job is submitted with ``POST {base}/enrich-url`` and polled with
``GET {base}/enrich-status/{jobId}`` until it reports ``complete`` or
``error``.
"""

import asyncio
from typing import Awaitable, Callable, Optional

import httpx
from loguru import logger

from caterlead.config import settings
from caterlead.services.enrichment.exceptions import (
    EnrichmentAPIError,
    EnrichmentTimeoutError,
)


class EnrichmentClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        poll_interval: Optional[float] = None,
        poll_attempts: Optional[int] = None,
        timeout: float = 30.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.base_url = (base_url or settings.enrichment_api_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.enrichment_api_key
        self.poll_interval = (
            poll_interval if poll_interval is not None else settings.enrichment_poll_interval
        )
        self.poll_attempts = poll_attempts or settings.enrichment_poll_attempts
        self.timeout = timeout
        self._sleep = sleep

    @property
    def headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def enrich_url(self, url: str) -> dict:
        """Submit ``url`` and wait for the raw enrichment result."""
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            job_id = await self.submit(client, url)
            return await self.wait_for_result(client, job_id)

    async def submit(self, client: httpx.AsyncClient, url: str) -> str:
        try:
            resp = await client.post(
                f"{self.base_url}/enrich-url", headers=self.headers, json={"url": url}
            )
        except httpx.HTTPError as e:
            raise EnrichmentAPIError(f"Enrichment request failed: {e}") from e

        if resp.status_code >= 400:
            raise EnrichmentAPIError(
                f"Enrichment failed: {resp.status_code} - {resp.text[:200]}"
            )

        job_id = resp.json().get("jobId")
        if not job_id:
            raise EnrichmentAPIError("No job ID returned from enrichment service")

        logger.info(f"Enrichment job {job_id} started for {url}")
        return job_id

    async def wait_for_result(self, client: httpx.AsyncClient, job_id: str) -> dict:
        status_url = f"{self.base_url}/enrich-status/{job_id}"

        for attempt in range(1, self.poll_attempts + 1):
            await self._sleep(self.poll_interval)

            try:
                resp = await client.get(status_url, headers=self.headers)
            except httpx.HTTPError as e:
                logger.warning(f"Status check for job {job_id} failed (attempt {attempt}): {e}")
                continue

            if resp.status_code != 200:
                logger.warning(
                    f"Status check for job {job_id} returned {resp.status_code} "
                    f"(attempt {attempt}/{self.poll_attempts})"
                )
                continue

            job = resp.json()
            status = job.get("status")
            if status == "complete":
                result = job.get("result")
                if not result:
                    raise EnrichmentAPIError("No enrichment data returned")
                return result
            if status == "error":
                raise EnrichmentAPIError(f"Enrichment failed: {job.get('message')}")

            logger.debug(f"Job {job_id} still {status} (attempt {attempt}/{self.poll_attempts})")

        raise EnrichmentTimeoutError(
            f"Enrichment timed out after {self.poll_attempts} attempts"
        )
