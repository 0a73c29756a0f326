"""NDJSON streaming of search progress and results."""

from .consumer import StreamConsumer, consume, consume_search
from .events import (
    NDJSON_MEDIA_TYPE,
    BusinessEvent,
    CompleteEvent,
    ErrorEvent,
    ProgressEvent,
    StreamEvent,
    decode_event,
    encode_event,
    encode_stream,
)
from .producer import stream_search

__all__ = [
    "NDJSON_MEDIA_TYPE",
    "BusinessEvent",
    "CompleteEvent",
    "ErrorEvent",
    "ProgressEvent",
    "StreamConsumer",
    "StreamEvent",
    "consume",
    "consume_search",
    "decode_event",
    "encode_event",
    "encode_stream",
    "stream_search",
]
