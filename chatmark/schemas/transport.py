"""Transport schemas for server-sent-event delivery of fragments.

The chat backend pushes one ``message`` event per generated token with a
JSON body ``{"content": "..."}`` and closes with a ``complete`` event whose
content is ``[DONE]``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SseEvent(BaseModel):
    """One dispatched server-sent event, before payload decoding."""

    id: str | None = Field(default=None, description="Last event id seen")
    event: str = Field(default="message", description="Event name")
    data: str = Field(default="", description="Data lines joined by newlines")


class TransportEvent(BaseModel):
    """A decoded fragment, or the completion marker."""

    content: str = Field(default="", description="Text fragment to append")
    is_complete: bool = Field(default=False, description="True for the completion marker")
    event_id: str | None = Field(default=None, description="Originating SSE id")
