"""Server-sent-event decoding for streamed chat responses.

Turns the raw line stream of a ``text/event-stream`` response into
:class:`TransportEvent` values the stream controller can consume.
Fragment ordering is preserved exactly as received; nothing here retries,
reorders, or reconnects.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator

from chatmark.errors import TransportError
from chatmark.schemas.streaming import RenderFrame
from chatmark.schemas.transport import SseEvent, TransportEvent
from chatmark.stream.controller import StreamRenderController

logger = logging.getLogger(__name__)

COMPLETE_EVENT = "complete"
DONE_MARKER = "[DONE]"


class SseDecoder:
    """Incremental line-by-line SSE parser.

    Feed lines without their terminators (a trailing ``\\r`` is tolerated).
    A blank line dispatches the pending event.
    """

    def __init__(self) -> None:
        self._last_id: str | None = None
        self._event = ""
        self._data: list[str] = []

    def feed_line(self, line: str) -> SseEvent | None:
        """Consume one line; return an event when the line dispatches one."""
        line = line.rstrip("\r\n")
        if not line:
            return self._dispatch()

        if line.startswith(":"):
            return None

        field, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]

        if field == "data":
            self._data.append(value)
        elif field == "event":
            self._event = value
        elif field == "id":
            self._last_id = value
        elif field != "retry":
            logger.debug("Ignoring unknown SSE field %r", field)
        return None

    def flush(self) -> SseEvent | None:
        """Dispatch an event left unterminated at end of input."""
        return self._dispatch()

    def _dispatch(self) -> SseEvent | None:
        if not self._data and not self._event:
            return None
        event = SseEvent(
            id=self._last_id,
            event=self._event or "message",
            data="\n".join(self._data),
        )
        self._event = ""
        self._data = []
        return event


def parse_sse(lines: Iterable[str]) -> Iterator[SseEvent]:
    """Yield every event found in an iterable of SSE lines."""
    decoder = SseDecoder()
    for line in lines:
        event = decoder.feed_line(line)
        if event is not None:
            yield event
    tail = decoder.flush()
    if tail is not None:
        yield tail


async def aparse_sse(lines: AsyncIterable[str]) -> AsyncIterator[SseEvent]:
    """Async counterpart of :func:`parse_sse`."""
    decoder = SseDecoder()
    async for line in lines:
        event = decoder.feed_line(line)
        if event is not None:
            yield event
    tail = decoder.flush()
    if tail is not None:
        yield tail


def decode_event(event: SseEvent) -> TransportEvent:
    """Decode one SSE event's JSON payload.

    Raises:
        TransportError: If the payload is not a JSON object.
    """
    try:
        payload = json.loads(event.data) if event.data else {}
    except json.JSONDecodeError as exc:
        logger.warning("Malformed SSE payload (id=%s): %r", event.id, event.data[:80])
        raise TransportError(f"Malformed event payload (id={event.id}): {exc}") from exc

    if not isinstance(payload, dict):
        raise TransportError(
            f"Expected a JSON object payload (id={event.id}), got {type(payload).__name__}"
        )

    content = payload.get("content")
    if event.event == COMPLETE_EVENT or content == DONE_MARKER:
        return TransportEvent(is_complete=True, event_id=event.id)

    if event.event != "message":
        logger.debug("Treating SSE event %r as a message", event.event)

    if not isinstance(content, str):
        content = ""
    return TransportEvent(content=content, event_id=event.id)


def replay(lines: Iterable[str], controller: StreamRenderController) -> RenderFrame:
    """Drive a controller from a complete SSE transcript.

    Returns:
        The final frame.

    Raises:
        TransportError: If a payload is malformed or the transcript ends
            without a completion marker. The message is abandoned first, so
            ``controller.frame`` still holds the last rendered output.
    """
    controller.start()
    try:
        for sse_event in parse_sse(lines):
            event = decode_event(sse_event)
            if event.is_complete:
                return controller.complete()
            if event.content:
                controller.feed(event.content)
    except TransportError as exc:
        controller.abandon(str(exc))
        raise

    controller.abandon("transcript ended without a completion marker")
    raise TransportError("Stream ended without a completion marker")
