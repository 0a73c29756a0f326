"""Stream event models and the NDJSON wire codec.

One event per line, compact JSON, ``\\n`` terminated. The ``type`` field
tags the variant; ``complete`` and ``error`` are terminal.
"""

from typing import Annotated, AsyncIterator, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from caterlead.services.places.models import Business

NDJSON_MEDIA_TYPE = "application/x-ndjson"


class ProgressEvent(BaseModel):
    type: Literal["progress"] = "progress"
    step: str
    message: str
    count: Optional[int] = None
    total: Optional[int] = None


class BusinessEvent(BaseModel):
    type: Literal["business"] = "business"
    data: Business


class CompleteEvent(BaseModel):
    type: Literal["complete"] = "complete"
    results: list[Business] = []
    message: str = ""


class ErrorEvent(BaseModel):
    type: Literal["error"] = "error"
    error: str


StreamEvent = Annotated[
    Union[ProgressEvent, BusinessEvent, CompleteEvent, ErrorEvent],
    Field(discriminator="type"),
]

stream_event_adapter: TypeAdapter[StreamEvent] = TypeAdapter(StreamEvent)


def is_terminal(event: StreamEvent) -> bool:
    return isinstance(event, (CompleteEvent, ErrorEvent))


def encode_event(event: StreamEvent) -> str:
    """Render one event as a single NDJSON line."""
    return event.model_dump_json(by_alias=True, exclude_none=True) + "\n"


def decode_event(line: Union[str, bytes]) -> StreamEvent:
    """Parse one NDJSON line. Raises ``pydantic.ValidationError`` on bad input."""
    return stream_event_adapter.validate_json(line)


async def encode_stream(events: AsyncIterator[StreamEvent]) -> AsyncIterator[bytes]:
    async for event in events:
        yield encode_event(event).encode("utf-8")
