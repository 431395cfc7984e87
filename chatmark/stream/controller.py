"""Streaming render controller.

Owns the source buffer of one assistant message and re-renders the whole
buffer after each fragment. One controller instance per message (or per
conversation turn); nothing is shared between instances.

Lifecycle::

    IDLE ──start()/feed()──▶ STREAMING ──complete()──▶ COMPLETE
                                 │
                                 └──abandon()──▶ ABANDONED

``start()`` from any state discards the buffer and begins a new message.
"""

from __future__ import annotations

import logging
import threading

from chatmark.errors import StreamStateError
from chatmark.render.pipeline import render_markdown
from chatmark.schemas.config import RenderConfig
from chatmark.schemas.streaming import RenderFrame, StreamState

logger = logging.getLogger(__name__)


class StreamRenderController:
    """Turns an ordered sequence of text fragments into HTML frames.

    Every operation returns a :class:`RenderFrame`. Buffer mutation and the
    render that follows it happen under one lock, so if fragments are
    delivered from several threads the renders are serialized and each
    observes a consistent snapshot of the buffer.
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._config = config or RenderConfig()
        self._lock = threading.Lock()
        self._buffer = ""
        self._fragment_count = 0
        self._state = StreamState.IDLE
        self._frame = RenderFrame()

    # -- read-only views -------------------------------------------

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def buffer(self) -> str:
        """Everything received for the current message."""
        return self._buffer

    @property
    def frame(self) -> RenderFrame:
        """The last successfully rendered frame."""
        return self._frame

    @property
    def html(self) -> str:
        return self._frame.html

    # -- transitions -----------------------------------------------

    def start(self) -> RenderFrame:
        """Begin a new message, discarding whatever the previous one held."""
        with self._lock:
            if self._state is not StreamState.IDLE:
                logger.debug(
                    "Discarding %s message (%d fragments)",
                    self._state.value, self._fragment_count,
                )
            self._begin()
            return self._frame

    def feed(self, fragment: str) -> RenderFrame:
        """Append a fragment and re-render the accumulated buffer.

        Feeding an idle controller starts a message implicitly.

        Raises:
            StreamStateError: If the current message already completed or
                was abandoned. Call :meth:`start` first.
        """
        with self._lock:
            if self._state is StreamState.IDLE:
                self._begin()
            elif self._state is not StreamState.STREAMING:
                raise StreamStateError(
                    f"Cannot feed a {self._state.value} message; call start() first"
                )

            self._buffer += fragment
            self._fragment_count += 1
            self._frame = RenderFrame(
                delta=fragment,
                accumulated=self._buffer,
                html=render_markdown(self._buffer, streaming=True, config=self._config),
                fragment_count=self._fragment_count,
                state=self._state,
            )
            return self._frame

    def complete(self) -> RenderFrame:
        """Freeze the buffer and resolve any in-progress placeholder.

        Completing an already complete message returns the final frame again.

        Raises:
            StreamStateError: If no message is streaming.
        """
        with self._lock:
            if self._state is StreamState.COMPLETE:
                return self._frame
            if self._state is not StreamState.STREAMING:
                raise StreamStateError(f"Cannot complete a {self._state.value} message")

            self._state = StreamState.COMPLETE
            self._frame = RenderFrame(
                accumulated=self._buffer,
                html=render_markdown(self._buffer, config=self._config),
                fragment_count=self._fragment_count,
                state=self._state,
                is_complete=True,
            )
            logger.info(
                "Message complete: %d fragments, %d chars",
                self._fragment_count, len(self._buffer),
            )
            return self._frame

    def abandon(self, reason: str | None = None) -> RenderFrame:
        """Mark the message as cut off before its completion marker.

        The last rendered HTML is kept as-is; presenting the failure is up
        to the caller.

        Raises:
            StreamStateError: If no message is streaming.
        """
        with self._lock:
            if self._state is not StreamState.STREAMING:
                raise StreamStateError(f"Cannot abandon a {self._state.value} message")

            self._state = StreamState.ABANDONED
            self._frame = self._frame.model_copy(update={"state": self._state})
            logger.warning(
                "Message abandoned after %d fragments: %s",
                self._fragment_count, reason or "no completion marker",
            )
            return self._frame

    def reset(self) -> None:
        """Return to IDLE with an empty buffer."""
        with self._lock:
            self._buffer = ""
            self._fragment_count = 0
            self._state = StreamState.IDLE
            self._frame = RenderFrame()

    def _begin(self) -> None:
        """Start a fresh message (called under lock)."""
        self._buffer = ""
        self._fragment_count = 0
        self._state = StreamState.STREAMING
        self._frame = RenderFrame(state=self._state)
