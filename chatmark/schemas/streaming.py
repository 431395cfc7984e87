"""Streaming schemas for incremental message rendering.

Defines the RenderFrame returned by the stream controller after every
fragment, and the lifecycle states a message moves through.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class StreamState(StrEnum):
    """Lifecycle of one assistant message."""

    IDLE = "idle"
    STREAMING = "streaming"
    COMPLETE = "complete"
    ABANDONED = "abandoned"


class RenderFrame(BaseModel):
    """The result of one render pass over the accumulated buffer."""

    delta: str = Field(default="", description="Fragment that triggered this pass")
    accumulated: str = Field(default="", description="Full source buffer so far")
    html: str = Field(default="", description="Rendered HTML for the whole buffer")
    fragment_count: int = Field(default=0, ge=0, description="Fragments received so far")
    state: StreamState = Field(default=StreamState.IDLE)
    is_complete: bool = Field(
        default=False, description="True once the completion marker was received"
    )
