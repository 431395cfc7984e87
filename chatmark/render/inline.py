"""Inline transformer: code spans, bold, italic.

Rules run in a fixed order over escaped block text:

1. ``code`` spans, whose content is stashed so later rules never see it
2. ``**bold**`` / ``__bold__``
3. ``*italic*`` / ``_italic_``

Each rule pairs delimiters shortest-match, left to right. Whatever is left
unpaired stays literal. Bold, italic and code spans never cross a line.

Stash tokens look like ``<@3@>``. Escaped text cannot contain ``<``, so a
token can never collide with message content.
"""

from __future__ import annotations

import re

_CODE_SPAN_RE = re.compile(r"`([^`\n]+)`")
_BOLD_RES = (
    re.compile(r"\*\*(.+?)\*\*"),
    re.compile(r"__(.+?)__"),
)
_ITALIC_RES = (
    re.compile(r"\*(.+?)\*"),
    re.compile(r"_([^_\n]+)_"),
)
_STASH_RE = re.compile(r"<@(\d+)@>")
_EMPHASIS_TAG_RE = re.compile(r"<(/?)(?:strong|em)>")
_DELIMITERS = "`*_"


class _Stash:
    """Holds finished HTML fragments out of reach of later regex passes."""

    def __init__(self) -> None:
        self._items: list[str] = []

    def put(self, html: str) -> str:
        self._items.append(html)
        return f"<@{len(self._items) - 1}@>"

    def restore(self, text: str) -> str:
        return _STASH_RE.sub(lambda m: self._items[int(m.group(1))], text)


def _balanced(html: str) -> bool:
    depth = 0
    for tag in _EMPHASIS_TAG_RE.finditer(html):
        depth += -1 if tag.group(1) else 1
        if depth < 0:
            return False
    return depth == 0


def _wrapper(tag: str):
    """Build a substitution that wraps a match in ``tag``.

    A match whose content would straddle an existing element boundary is
    left literal, so the output stays properly nested.
    """

    def replace(match: re.Match[str]) -> str:
        inner = match.group(1)
        if not _balanced(inner):
            return match.group(0)
        return f"<{tag}>{inner}</{tag}>"

    return replace


def _pending_span(body: str, placeholder_class: str) -> str:
    return f'<span class="{placeholder_class}">{body}</span>'


def _stash_pending_code(work: str, stash: _Stash, placeholder_class: str) -> str:
    """Fold an unpaired backtick on the last line into a placeholder.

    The content after the backtick is shown raw, exactly as it will appear
    inside the code span once the closing backtick arrives.
    """
    line_start = work.rfind("\n") + 1
    opener = work.find("`", line_start)
    if opener == -1:
        return work
    body = stash.restore(work[opener + 1:])
    return work[:opener] + stash.put(_pending_span(body, placeholder_class))


def _wrap_pending_emphasis(work: str, placeholder_class: str) -> str:
    """Wrap the first unpaired emphasis opener on the last line.

    Only delimiters outside completed strong/em elements qualify, so the
    wrapped tail is always balanced markup. A delimiter followed by
    whitespace, or an underscore inside a word, is left literal.
    """
    line_start = work.rfind("\n") + 1
    depth = 0
    i = line_start
    while i < len(work):
        tag = _EMPHASIS_TAG_RE.match(work, i)
        if tag:
            depth += -1 if tag.group(1) else 1
            i = tag.end()
            continue

        char = work[i]
        if char not in "*_" or depth:
            i += 1
            continue

        run_end = i
        while run_end < len(work) and work[run_end] == char:
            run_end += 1
        following = work[run_end:run_end + 1]
        intraword = char == "_" and i > line_start and work[i - 1].isalnum()
        if not intraword and not following.isspace():
            return work[:i] + _pending_span(work[run_end:], placeholder_class)
        i = run_end

    return work


def render_inline(
    text: str,
    *,
    pending: bool = False,
    placeholder_class: str = "md-pending",
) -> str:
    """Apply the inline rules to one block's escaped text.

    Args:
        text: Escaped text of a paragraph, header, or list item.
        pending: The last line of ``text`` is still being streamed. An
            unpaired opener on it is rendered as a placeholder span instead
            of a literal delimiter, and a delimiter run at the very end is
            withheld until the next character shows what it is.
        placeholder_class: CSS class for the placeholder span.

    Returns:
        HTML for the block's content, without the container element.
    """
    if pending:
        # A trailing delimiter run may still grow (`*` into `**`); hold it back.
        text = text.rstrip(_DELIMITERS).removesuffix("\n")

    stash = _Stash()
    work = _CODE_SPAN_RE.sub(lambda m: stash.put(f"<code>{m.group(1)}</code>"), text)
    if pending:
        work = _stash_pending_code(work, stash, placeholder_class)

    for pattern in _BOLD_RES:
        work = pattern.sub(_wrapper("strong"), work)
    for pattern in _ITALIC_RES:
        work = pattern.sub(_wrapper("em"), work)

    if pending:
        work = _wrap_pending_emphasis(work, placeholder_class)

    return stash.restore(work)
