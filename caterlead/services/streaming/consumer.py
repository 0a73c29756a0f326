"""Incremental NDJSON stream reader.

Bytes arrive in arbitrary chunks; only complete lines are parsed and the
trailing fragment is carried over to the next ``feed``. A malformed line is
logged and skipped without ending the stream.
"""

from typing import AsyncIterator, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from caterlead.services.places.models import Business
from caterlead.services.streaming.events import (
    BusinessEvent,
    CompleteEvent,
    ErrorEvent,
    ProgressEvent,
    StreamEvent,
    decode_event,
)


class StreamConsumer:
    """Accumulates state from a stream of NDJSON event bytes."""

    def __init__(self):
        self._buffer = b""
        self.progress: Optional[ProgressEvent] = None
        self.businesses: list[Business] = []
        self.error: Optional[str] = None
        self.message: str = ""
        self.done = False
        self.skipped_lines = 0

    @property
    def succeeded(self) -> bool:
        return self.done and self.error is None

    def feed(self, chunk: bytes) -> list[StreamEvent]:
        """Buffer ``chunk`` and apply every complete line. Returns applied events."""
        if self.done:
            return []
        self._buffer += chunk
        *lines, self._buffer = self._buffer.split(b"\n")

        applied = []
        for line in lines:
            if self.done:
                break
            event = self._parse(line)
            if event is not None:
                self._apply(event)
                applied.append(event)
        return applied

    def close(self) -> list[StreamEvent]:
        """Handle end of input: parse a leftover fragment once, then finish."""
        applied = []
        fragment, self._buffer = self._buffer, b""
        if not self.done and fragment.strip():
            event = self._parse(fragment)
            if event is not None:
                self._apply(event)
                applied.append(event)
        self.done = True
        return applied

    def _parse(self, line: bytes) -> Optional[StreamEvent]:
        if not line.strip():
            return None
        try:
            return decode_event(line.decode("utf-8"))
        except (UnicodeDecodeError, ValidationError) as e:
            self.skipped_lines += 1
            logger.warning(f"Skipping malformed stream line ({len(line)} bytes): {e}")
            return None

    def _apply(self, event: StreamEvent) -> None:
        if isinstance(event, ProgressEvent):
            self.progress = event
        elif isinstance(event, BusinessEvent):
            self.businesses.append(event.data)
        elif isinstance(event, CompleteEvent):
            self.businesses = list(event.results)
            self.message = event.message
            self.done = True
        elif isinstance(event, ErrorEvent):
            self.error = event.error
            self.done = True


async def consume(
    chunks: AsyncIterator[bytes], consumer: Optional[StreamConsumer] = None
) -> StreamConsumer:
    """Drive a consumer from ``chunks`` until a terminal event or exhaustion."""
    consumer = consumer or StreamConsumer()
    async for chunk in chunks:
        consumer.feed(chunk)
        if consumer.done:
            break
    else:
        consumer.close()
        return consumer

    aclose = getattr(chunks, "aclose", None)
    if aclose is not None:
        await aclose()
    return consumer


async def consume_search(
    client: httpx.AsyncClient, url: str, params: Optional[dict] = None
) -> StreamConsumer:
    """Read a remote streaming search endpoint to completion."""
    async with client.stream("GET", url, params=params) as response:
        response.raise_for_status()
        return await consume(response.aiter_bytes())
