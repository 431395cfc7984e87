"""Line-oriented block segmenter.

Splits escaped text into an ordered list of typed blocks. Precedence per
line, outside an open fence: fence, header, ordered item, unordered item,
paragraph continuation. A header or list line always closes the paragraph
run before it; blank lines only separate and never produce a block.

Text sharing a line with a closing fence is scanned again as a line of its
own. An opening line that carries a second fence, as in
``"```ls``` lists files"``, is a complete code block by itself with no
language tag. Other text after the language tag starts the code content.
"""

from __future__ import annotations

import re

from chatmark.schemas.blocks import (
    Block,
    CodeBlock,
    Header,
    ListItem,
    ListKind,
    Paragraph,
)

_FENCE_RE = re.compile(r"^\s*```")
_FENCE_INFO_RE = re.compile(r"[ \t]*(\w+)?[ \t]*")
_HEADER_RE = re.compile(r"^(#{1,3})[ \t]+(\S.*)$")
_ORDERED_RE = re.compile(r"^\d+\.[ \t]+(\S.*)$")
_UNORDERED_RE = re.compile(r"^[-*][ \t]+(\S.*)$")


def _match_line(line: str) -> Block | None:
    """Classify a single non-blank line that sits outside a fence."""
    header = _HEADER_RE.match(line)
    if header:
        return Header(level=len(header.group(1)), text=header.group(2).rstrip())

    ordered = _ORDERED_RE.match(line)
    if ordered:
        return ListItem(list_kind=ListKind.ORDERED, text=ordered.group(1).rstrip())

    unordered = _UNORDERED_RE.match(line)
    if unordered:
        return ListItem(list_kind=ListKind.UNORDERED, text=unordered.group(1).rstrip())

    return None


def tokenize(escaped: str) -> list[Block]:
    """Partition escaped text into blocks in source order.

    Args:
        escaped: Output of :func:`chatmark.render.escape.escape_html`.

    Returns:
        The block sequence. An unterminated fence yields a CodeBlock with
        ``closed=False`` that runs to the end of the input.
    """
    blocks: list[Block] = []
    paragraph: list[str] = []
    code: list[str] | None = None
    language: str | None = None
    lines = [line.removesuffix("\r") for line in escaped.split("\n")]

    def flush_paragraph() -> None:
        text = "\n".join(line.strip() for line in paragraph)
        if text:
            blocks.append(Paragraph(text=text))
        paragraph.clear()

    def requeue(rest: str, position: int) -> None:
        # Text sharing a line with a fence is scanned again as its own line.
        rest = rest.strip()
        if rest:
            lines.insert(position, rest)

    index = 0
    while index < len(lines):
        line = lines[index]
        index += 1

        if code is not None:
            fence = _FENCE_RE.match(line)
            if fence:
                blocks.append(CodeBlock(text="\n".join(code), language=language))
                code = None
                language = None
                requeue(line[fence.end():], index)
            else:
                code.append(line)
            continue

        fence = _FENCE_RE.match(line)
        if fence:
            flush_paragraph()
            after = line[fence.end():]
            closer = after.find("```")
            if closer != -1:
                blocks.append(CodeBlock(text=after[:closer].strip()))
                requeue(after[closer + 3:], index)
                continue
            info = _FENCE_INFO_RE.match(after)
            language = info.group(1)
            code = [after[info.end():]] if info.end() < len(after) else []
            continue

        if not line.strip():
            flush_paragraph()
            continue

        block = _match_line(line)
        if block is not None:
            flush_paragraph()
            blocks.append(block)
            continue

        paragraph.append(line)

    if code is not None:
        blocks.append(CodeBlock(text="\n".join(code), language=language, closed=False))
    flush_paragraph()

    return blocks
