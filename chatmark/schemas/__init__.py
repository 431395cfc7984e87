"""chatmark schema definitions.

All Pydantic v2 models shared by the render pipeline, the stream
controller, and the transport decoder.
"""

from chatmark.schemas.blocks import (
    Block,
    CodeBlock,
    Header,
    ListGroup,
    ListItem,
    ListKind,
    Paragraph,
    Renderable,
)
from chatmark.schemas.config import RenderConfig
from chatmark.schemas.streaming import RenderFrame, StreamState
from chatmark.schemas.transport import SseEvent, TransportEvent

__all__ = [
    "Block",
    "CodeBlock",
    "Header",
    "ListGroup",
    "ListItem",
    "ListKind",
    "Paragraph",
    "RenderConfig",
    "RenderFrame",
    "Renderable",
    "SseEvent",
    "StreamState",
    "TransportEvent",
]
