"""Transport seam: decoding server-sent events into fragments."""

from chatmark.transport.sse import (
    SseDecoder,
    aparse_sse,
    decode_event,
    parse_sse,
    replay,
)

__all__ = ["SseDecoder", "aparse_sse", "decode_event", "parse_sse", "replay"]
