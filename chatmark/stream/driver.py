"""Async driver connecting a fragment transport to a stream controller.

Consumes transport events on a single task, in arrival order, so renders
for one message are naturally serialized.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable

from chatmark.errors import TransportError
from chatmark.schemas.streaming import RenderFrame
from chatmark.schemas.transport import TransportEvent
from chatmark.stream.controller import StreamRenderController
from chatmark.stream.events import RenderEventEmitter, RenderEventType

logger = logging.getLogger(__name__)


async def stream_message(
    events: AsyncIterable[TransportEvent],
    controller: StreamRenderController,
    emitter: RenderEventEmitter | None = None,
) -> RenderFrame:
    """Render one message as its fragments arrive.

    Args:
        events: Decoded transport events for a single message.
        controller: Controller owning this message's buffer. It is restarted
            before the first event.
        emitter: Optional event emitter notified after every frame.

    Returns:
        The final, completed frame.

    Raises:
        TransportError: If the transport raises one, or the events run out
            before the completion marker. The controller is left ABANDONED
            with its last frame intact.
    """
    controller.start()
    if emitter:
        await emitter.emit(RenderEventType.MESSAGE_STARTED)

    try:
        async for event in events:
            if event.is_complete:
                frame = controller.complete()
                if emitter:
                    await emitter.emit(
                        RenderEventType.MESSAGE_COMPLETED,
                        html=frame.html,
                        fragment_count=frame.fragment_count,
                    )
                return frame

            if not event.content:
                continue

            frame = controller.feed(event.content)
            if emitter:
                await emitter.emit(
                    RenderEventType.FRAME_RENDERED,
                    html=frame.html,
                    fragment_count=frame.fragment_count,
                )
    except TransportError as exc:
        logger.warning("Transport failed mid-message: %s", exc)
        await _abandon(controller, emitter, str(exc))
        raise

    await _abandon(controller, emitter, "stream ended without a completion marker")
    raise TransportError("Stream ended without a completion marker")


async def _abandon(
    controller: StreamRenderController,
    emitter: RenderEventEmitter | None,
    reason: str,
) -> None:
    frame = controller.abandon(reason)
    if emitter:
        await emitter.emit(RenderEventType.ERROR, message=reason)
        await emitter.emit(
            RenderEventType.MESSAGE_ABANDONED,
            html=frame.html,
            fragment_count=frame.fragment_count,
        )
