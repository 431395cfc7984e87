"""Message lifecycle events for hosts that follow a stream.

The async driver reports each message as it streams: start, one event per
rendered frame, then completion or abandonment. A host UI subscribes to the
event types it cares about instead of polling the controller.

History is scoped to the current message. ``MESSAGE_STARTED`` drops the
previous message's events, and a bounded buffer caps long messages, so one
emitter can serve a whole conversation.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY = 256


class RenderEventType(StrEnum):
    """Points in a message's life that listeners can observe."""

    MESSAGE_STARTED = "message_started"
    FRAME_RENDERED = "frame_rendered"
    MESSAGE_COMPLETED = "message_completed"
    MESSAGE_ABANDONED = "message_abandoned"
    ERROR = "error"


class RenderEvent(BaseModel):
    """A single lifecycle event."""

    type: RenderEventType = Field(description="Event type")
    message_index: int = Field(
        default=0,
        ge=0,
        description="Ordinal of the message within this emitter, starting at 0",
    )
    timestamp: float = Field(
        default_factory=time.time,
        description="Unix timestamp when the event occurred",
    )
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Payload: html and fragment_count for frames, message for errors",
    )


EventListener = Callable[[RenderEvent], Any]


class RenderEventEmitter:
    """Fans lifecycle events out to subscribed listeners.

    Args:
        max_history: Most recent events kept for the current message.
    """

    def __init__(self, max_history: int = DEFAULT_MAX_HISTORY) -> None:
        if max_history < 1:
            raise ValueError("max_history must be at least 1")
        self._subscriptions: list[tuple[EventListener, frozenset[RenderEventType]]] = []
        self._history: deque[RenderEvent] = deque(maxlen=max_history)
        self._message_index = -1

    @property
    def history(self) -> list[RenderEvent]:
        """Events of the current message, oldest first."""
        return list(self._history)

    @property
    def message_index(self) -> int:
        """Ordinal of the current message, or -1 before the first one."""
        return self._message_index

    def add_listener(
        self, listener: EventListener, *event_types: RenderEventType
    ) -> None:
        """Subscribe ``listener`` to ``event_types``, or to every type if none given."""
        self._subscriptions.append((listener, frozenset(event_types)))

    def remove_listener(self, listener: EventListener) -> None:
        self._subscriptions = [
            (ln, types) for ln, types in self._subscriptions if ln is not listener
        ]

    async def emit(self, event_type: RenderEventType, **data: Any) -> RenderEvent:
        """Record an event and deliver it to matching listeners.

        Async listeners are awaited in subscription order. A failing listener
        is logged and skipped; the stream keeps going.
        """
        if event_type == RenderEventType.MESSAGE_STARTED:
            self._message_index += 1
            self._history.clear()

        event = RenderEvent(
            type=event_type,
            message_index=max(self._message_index, 0),
            data=data,
        )
        self._history.append(event)

        for listener, types in self._subscriptions:
            if types and event_type not in types:
                continue
            try:
                result = listener(event)
                if asyncio.iscoroutine(result):
                    await result
            except Exception:
                logger.exception(
                    "Listener failed on %s for message %d", event_type, event.message_index
                )

        return event
