"""HTML escaping for raw message text.

The render pipeline calls :func:`escape_html` exactly once, on the whole
buffer, before any markdown is recognized. Nothing downstream escapes
again: block and inline stages only ever see (and wrap) escaped text.
"""

from __future__ import annotations

# Order matters: '&' first so the entities introduced below are not re-escaped.
_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
)


def escape_html(text: str) -> str:
    """Replace the three HTML-significant characters with entities.

    Quotes are left alone: the escaped text only ever lands in element
    content, never inside an attribute value.
    """
    for char, entity in _REPLACEMENTS:
        text = text.replace(char, entity)
    return text
