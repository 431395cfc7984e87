"""Restricted markdown render pipeline.

escape → tokenize → group lists → assemble (with inline rules applied to
prose blocks).
"""

from chatmark.render.assembler import assemble, render_block
from chatmark.render.escape import escape_html
from chatmark.render.grouping import group_lists
from chatmark.render.inline import render_inline
from chatmark.render.pipeline import render_markdown
from chatmark.render.tokenizer import tokenize

__all__ = [
    "assemble",
    "escape_html",
    "group_lists",
    "render_block",
    "render_inline",
    "render_markdown",
    "tokenize",
]
