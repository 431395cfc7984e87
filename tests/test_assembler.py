"""Tests for chatmark.render.assembler: container markup and ordering."""

from __future__ import annotations

from chatmark.render.assembler import assemble, render_block
from chatmark.schemas.blocks import (
    CodeBlock,
    Header,
    ListGroup,
    ListItem,
    ListKind,
    Paragraph,
)
from chatmark.schemas.config import RenderConfig

_CONFIG = RenderConfig()


class TestRenderBlock:
    def test_header(self):
        assert render_block(Header(level=2, text="Hi"), _CONFIG) == "<h2>Hi</h2>"

    def test_header_inline(self):
        html = render_block(Header(level=1, text="A **big** deal"), _CONFIG)
        assert html == "<h1>A <strong>big</strong> deal</h1>"

    def test_code_not_reescaped_or_transformed(self):
        block = CodeBlock(text="&lt;b&gt; **x**")
        assert render_block(block, _CONFIG) == "<pre><code>&lt;b&gt; **x**</code></pre>"

    def test_code_language_class_opt_in(self):
        block = CodeBlock(text="x", language="py")
        assert render_block(block, _CONFIG) == "<pre><code>x</code></pre>"
        config = RenderConfig(code_language_class=True)
        assert render_block(block, config) == '<pre><code class="language-py">x</code></pre>'

    def test_paragraph_line_breaks(self):
        assert render_block(Paragraph(text="a\nb"), _CONFIG) == "<p>a<br>b</p>"

    def test_custom_line_break(self):
        config = RenderConfig(line_break="<br />")
        assert render_block(Paragraph(text="a\nb"), config) == "<p>a<br />b</p>"

    def test_ordered_list(self):
        group = ListGroup(
            list_kind=ListKind.ORDERED,
            items=[
                ListItem(list_kind=ListKind.ORDERED, text="one"),
                ListItem(list_kind=ListKind.ORDERED, text="*two*"),
            ],
        )
        assert render_block(group, _CONFIG) == "<ol><li>one</li><li><em>two</em></li></ol>"


class TestOpenCodeBlock:
    def test_partial_closing_fence_hidden_while_streaming(self):
        block = CodeBlock(text="x\n``", closed=False)
        assert render_block(block, _CONFIG, streaming=True) == "<pre><code>x</code></pre>"

    def test_trailing_empty_line_hidden_while_streaming(self):
        block = CodeBlock(text="x\n", closed=False)
        assert render_block(block, _CONFIG, streaming=True) == "<pre><code>x</code></pre>"

    def test_kept_when_not_streaming(self):
        block = CodeBlock(text="x\n``", closed=False)
        assert render_block(block, _CONFIG) == "<pre><code>x\n``</code></pre>"

    def test_partial_code_line_is_shown(self):
        block = CodeBlock(text="x\nprin", closed=False)
        assert render_block(block, _CONFIG, streaming=True) == "<pre><code>x\nprin</code></pre>"


class TestAssemble:
    def test_order_preserved_without_separators(self):
        blocks = [Header(level=1, text="T"), Paragraph(text="p"), CodeBlock(text="c")]
        assert assemble(blocks) == "<h1>T</h1><p>p</p><pre><code>c</code></pre>"

    def test_empty(self):
        assert assemble([]) == ""

    def test_pending_applies_to_last_block_only(self):
        blocks = [Paragraph(text="*a"), Paragraph(text="b *c")]
        html = assemble(blocks, streaming=True, tail_open=True)
        assert html == '<p>*a</p><p>b <span class="md-pending">c</span></p>'

    def test_no_pending_when_tail_closed(self):
        blocks = [Paragraph(text="b *c")]
        assert assemble(blocks, streaming=True, tail_open=False) == "<p>b *c</p>"

    def test_pending_in_last_list_item(self):
        group = ListGroup(
            list_kind=ListKind.UNORDERED,
            items=[
                ListItem(list_kind=ListKind.UNORDERED, text="*a"),
                ListItem(list_kind=ListKind.UNORDERED, text="**b"),
            ],
        )
        html = assemble([group], streaming=True, tail_open=True)
        assert html == '<ul><li>*a</li><li><span class="md-pending">b</span></li></ul>'

    def test_withheld_paragraph_skipped(self):
        blocks = [Paragraph(text="a"), Paragraph(text="**")]
        assert assemble(blocks, streaming=True, tail_open=True) == "<p>a</p>"

    def test_withheld_only_list_item_skips_group(self):
        group = ListGroup(
            list_kind=ListKind.ORDERED,
            items=[ListItem(list_kind=ListKind.ORDERED, text="`")],
        )
        assert assemble([group], streaming=True, tail_open=True) == ""
