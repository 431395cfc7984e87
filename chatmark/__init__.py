"""chatmark: streaming-safe markdown rendering for chat transcripts."""

__version__ = "0.1.0"

from chatmark.render import render_markdown
from chatmark.stream.controller import StreamRenderController

__all__ = ["render_markdown", "StreamRenderController", "__version__"]
