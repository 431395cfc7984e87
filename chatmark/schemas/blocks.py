"""Block schemas produced by the tokenizer.

Every render pass recomputes the block sequence from scratch, so these
models are plain values: they carry escaped text and structural facts
only, never rendered markup.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field, model_validator


class ListKind(StrEnum):
    """Marker family of a list item."""

    ORDERED = "ordered"
    UNORDERED = "unordered"


class Paragraph(BaseModel):
    """A run of prose lines uninterrupted by a blank line."""

    kind: Literal["paragraph"] = "paragraph"
    text: str = Field(description="Escaped paragraph text, lines joined by newlines")


class Header(BaseModel):
    """A single-line ATX header (levels 1-3 only)."""

    kind: Literal["header"] = "header"
    level: int = Field(ge=1, le=3, description="Number of leading '#' markers")
    text: str = Field(description="Escaped header text without the markers")


class CodeBlock(BaseModel):
    """A fenced code block.

    ``closed`` is False when the buffer ended before the closing fence; the
    block then spans to the end of the buffer.
    """

    kind: Literal["code"] = "code"
    text: str = Field(default="", description="Verbatim escaped content between fences")
    language: str | None = Field(
        default=None, description="Word following the opening fence, if any"
    )
    closed: bool = Field(default=True, description="Whether the closing fence was seen")


class ListItem(BaseModel):
    """One list-item line."""

    kind: Literal["list_item"] = "list_item"
    list_kind: ListKind = Field(description="Ordered or unordered marker")
    text: str = Field(description="Escaped item text without the marker")


Block = Annotated[
    Paragraph | Header | CodeBlock | ListItem,
    Field(discriminator="kind"),
]


class ListGroup(BaseModel):
    """A maximal run of adjacent list items sharing the same kind."""

    kind: Literal["list_group"] = "list_group"
    list_kind: ListKind
    items: list[ListItem] = Field(default_factory=list)

    @model_validator(mode="after")
    def _items_share_kind(self) -> ListGroup:
        mixed = [item for item in self.items if item.list_kind != self.list_kind]
        if mixed:
            raise ValueError(
                f"ListGroup of kind {self.list_kind} contains {len(mixed)} "
                "item(s) of another kind"
            )
        return self


# What the assembler consumes: blocks with list items folded into groups.
Renderable = Paragraph | Header | CodeBlock | ListGroup
