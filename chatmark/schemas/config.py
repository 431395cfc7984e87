"""Render configuration schema."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RenderConfig(BaseModel):
    """Settings that shape the emitted HTML.

    None of these affect which blocks or inline constructs are recognized;
    they only change the markup written for them.
    """

    placeholder_class: str = Field(
        default="md-pending",
        pattern=r"^[A-Za-z_][A-Za-z0-9_-]*$",
        description="CSS class of the span wrapping an unterminated trailing construct",
    )
    line_break: str = Field(
        default="<br>", description="Markup inserted for single newlines in a paragraph"
    )
    code_language_class: bool = Field(
        default=False,
        description="Emit class=\"language-<tag>\" on fenced code elements",
    )
    stabilize_trailing: bool = Field(
        default=True,
        description="Render unterminated trailing constructs as a placeholder while streaming",
    )
