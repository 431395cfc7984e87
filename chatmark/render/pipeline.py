"""End-to-end render pass: raw text in, sanitized HTML out.

A pass is a pure function of the buffer. Streaming callers re-run it over
the whole accumulated buffer after every fragment; nothing is patched
incrementally, because a delimiter's meaning can depend on text that has
not arrived yet.
"""

from __future__ import annotations

from chatmark.render.assembler import assemble
from chatmark.render.escape import escape_html
from chatmark.render.grouping import group_lists
from chatmark.render.tokenizer import tokenize
from chatmark.schemas.config import RenderConfig


def render_markdown(
    text: str,
    *,
    streaming: bool = False,
    config: RenderConfig | None = None,
) -> str:
    """Render restricted markdown to HTML that is safe to insert as-is.

    Args:
        text: Raw (unescaped) message text.
        streaming: More fragments are expected. With
            ``config.stabilize_trailing`` set, an unterminated construct at
            the end of the buffer renders as a placeholder span.
        config: Markup settings. Defaults to ``RenderConfig()``.

    Returns:
        The HTML string. Empty or whitespace-only input yields ``""``.
    """
    if not text or not text.strip():
        return ""

    config = config or RenderConfig()
    escaped = escape_html(text)
    blocks = group_lists(tokenize(escaped))

    stabilize = streaming and config.stabilize_trailing
    return assemble(
        blocks,
        config,
        streaming=stabilize,
        tail_open=not escaped.endswith(("\n", "\r")),
    )
