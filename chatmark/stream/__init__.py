"""Streaming render controller, async driver, and render events."""

from chatmark.stream.controller import StreamRenderController
from chatmark.stream.driver import stream_message
from chatmark.stream.events import (
    EventListener,
    RenderEvent,
    RenderEventEmitter,
    RenderEventType,
)

__all__ = [
    "EventListener",
    "RenderEvent",
    "RenderEventEmitter",
    "RenderEventType",
    "StreamRenderController",
    "stream_message",
]
