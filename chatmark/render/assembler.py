"""Block assembler: maps blocks and list groups to container markup."""

from __future__ import annotations

import re
from collections.abc import Sequence

from chatmark.render.inline import render_inline
from chatmark.schemas.blocks import (
    CodeBlock,
    Header,
    ListGroup,
    ListKind,
    Paragraph,
    Renderable,
)
from chatmark.schemas.config import RenderConfig

# A line that may still grow into a closing fence.
_PARTIAL_FENCE_RE = re.compile(r"^\s*`{0,2}\s*$")


def _render_code(block: CodeBlock, config: RenderConfig, streaming: bool) -> str:
    text = block.text
    if streaming and not block.closed:
        lines = text.split("\n")
        if _PARTIAL_FENCE_RE.match(lines[-1]):
            text = "\n".join(lines[:-1])

    attrs = ""
    if config.code_language_class and block.language:
        attrs = f' class="language-{block.language}"'
    # Already escaped upstream; written verbatim.
    return f"<pre><code{attrs}>{text}</code></pre>"


def _render_list(group: ListGroup, config: RenderConfig, pending: bool) -> str:
    tag = "ol" if group.list_kind == ListKind.ORDERED else "ul"
    last = len(group.items) - 1
    items = []
    for index, item in enumerate(group.items):
        item_pending = pending and index == last
        content = render_inline(
            item.text, pending=item_pending, placeholder_class=config.placeholder_class
        )
        if item_pending and not content:
            continue
        items.append(f"<li>{content}</li>")

    if not items:
        return ""
    return f"<{tag}>{''.join(items)}</{tag}>"


def render_block(
    block: Renderable,
    config: RenderConfig,
    *,
    streaming: bool = False,
    pending: bool = False,
) -> str:
    """Render one block or list group to HTML.

    Args:
        block: The block to render.
        config: Markup settings.
        streaming: The message is still streaming and stabilization is on.
        pending: This is the final block and its last line is still open.
    """
    if isinstance(block, CodeBlock):
        return _render_code(block, config, streaming)

    if isinstance(block, ListGroup):
        return _render_list(block, config, pending)

    content = render_inline(
        block.text, pending=pending, placeholder_class=config.placeholder_class
    )
    if pending and not content:
        # Everything on the open line is withheld so far.
        return ""
    if isinstance(block, Header):
        return f"<h{block.level}>{content}</h{block.level}>"
    if isinstance(block, Paragraph):
        return "<p>" + content.replace("\n", config.line_break) + "</p>"

    raise TypeError(f"Unsupported block type: {type(block).__name__}")


def assemble(
    blocks: Sequence[Renderable],
    config: RenderConfig | None = None,
    *,
    streaming: bool = False,
    tail_open: bool = False,
) -> str:
    """Concatenate rendered blocks in sequence order.

    Args:
        blocks: Output of the list grouper.
        config: Markup settings. Defaults to ``RenderConfig()``.
        streaming: Apply the in-progress placeholder policy.
        tail_open: The buffer's final line has no terminating newline yet.
    """
    config = config or RenderConfig()
    last = len(blocks) - 1
    return "".join(
        render_block(
            block,
            config,
            streaming=streaming,
            pending=streaming and tail_open and index == last,
        )
        for index, block in enumerate(blocks)
    )
