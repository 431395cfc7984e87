"""Tests for chatmark.render.tokenizer: block segmentation and precedence."""

from __future__ import annotations

from chatmark.render.escape import escape_html
from chatmark.render.tokenizer import tokenize
from chatmark.schemas.blocks import CodeBlock, Header, ListItem, ListKind, Paragraph


class TestParagraphs:
    def test_empty_input(self):
        assert tokenize("") == []

    def test_blank_lines_only(self):
        assert tokenize("\n\n   \n") == []

    def test_single_newlines_stay_in_one_paragraph(self):
        assert tokenize("line one\nline two") == [Paragraph(text="line one\nline two")]

    def test_blank_line_run_separates_paragraphs(self):
        assert tokenize("a\n\n\nb") == [Paragraph(text="a"), Paragraph(text="b")]

    def test_whitespace_only_line_is_blank(self):
        assert tokenize("a\n   \nb") == [Paragraph(text="a"), Paragraph(text="b")]

    def test_crlf_line_endings(self):
        assert tokenize("a\r\nb") == [Paragraph(text="a\nb")]

    def test_outer_whitespace_trimmed(self):
        assert tokenize("  padded  ") == [Paragraph(text="padded")]

    def test_escaped_text_passes_through(self):
        blocks = tokenize(escape_html("<b>hi</b>"))
        assert blocks == [Paragraph(text="&lt;b&gt;hi&lt;/b&gt;")]


class TestHeaders:
    def test_levels_one_to_three(self):
        blocks = tokenize("# One\n## Two\n### Three")
        assert blocks == [
            Header(level=1, text="One"),
            Header(level=2, text="Two"),
            Header(level=3, text="Three"),
        ]

    def test_level_four_is_paragraph(self):
        assert tokenize("#### Four") == [Paragraph(text="#### Four")]

    def test_space_required(self):
        assert tokenize("#NoSpace") == [Paragraph(text="#NoSpace")]

    def test_marker_without_text_is_paragraph(self):
        assert tokenize("# ") == [Paragraph(text="#")]

    def test_header_closes_open_paragraph(self):
        blocks = tokenize("intro\n# Head\nmore")
        assert blocks == [
            Paragraph(text="intro"),
            Header(level=1, text="Head"),
            Paragraph(text="more"),
        ]


class TestListItems:
    def test_ordered(self):
        blocks = tokenize("1. one\n22. two")
        assert blocks == [
            ListItem(list_kind=ListKind.ORDERED, text="one"),
            ListItem(list_kind=ListKind.ORDERED, text="two"),
        ]

    def test_unordered_dash_and_star(self):
        blocks = tokenize("- a\n* b")
        assert [b.list_kind for b in blocks] == [ListKind.UNORDERED, ListKind.UNORDERED]
        assert [b.text for b in blocks] == ["a", "b"]

    def test_marker_needs_space(self):
        assert tokenize("-dash") == [Paragraph(text="-dash")]
        assert tokenize("1.no") == [Paragraph(text="1.no")]

    def test_bold_line_is_not_a_list_item(self):
        assert tokenize("**bold** start") == [Paragraph(text="**bold** start")]

    def test_list_item_closes_paragraph(self):
        blocks = tokenize("Steps:\n1. first")
        assert blocks == [
            Paragraph(text="Steps:"),
            ListItem(list_kind=ListKind.ORDERED, text="first"),
        ]

    def test_line_after_item_starts_paragraph(self):
        blocks = tokenize("- item\ntrailing prose")
        assert blocks == [
            ListItem(list_kind=ListKind.UNORDERED, text="item"),
            Paragraph(text="trailing prose"),
        ]


class TestFencedCode:
    def test_language_tag_captured(self):
        blocks = tokenize("```python\nx = 1\n```")
        assert blocks == [CodeBlock(text="x = 1", language="python")]

    def test_no_language(self):
        assert tokenize("```\nplain\n```") == [CodeBlock(text="plain")]

    def test_content_not_tokenized(self):
        blocks = tokenize("```\n# not a header\n- not a list\n\nstill code\n```")
        assert blocks == [CodeBlock(text="# not a header\n- not a list\n\nstill code")]

    def test_unterminated_runs_to_end(self):
        blocks = tokenize("```js\nconsole.log(1)")
        assert blocks == [CodeBlock(text="console.log(1)", language="js", closed=False)]

    def test_opening_fence_only(self):
        assert tokenize("```js") == [CodeBlock(text="", language="js", closed=False)]

    def test_fence_closes_paragraph_and_resumes(self):
        blocks = tokenize("text\n```\ncode\n```\nafter")
        assert blocks == [
            Paragraph(text="text"),
            CodeBlock(text="code"),
            Paragraph(text="after"),
        ]

    def test_closed_flag(self):
        (block,) = tokenize("```\na\n```")
        assert block.closed is True

    def test_text_after_closing_fence_kept(self):
        blocks = tokenize("```\ncode\n``` and then prose")
        assert blocks == [CodeBlock(text="code"), Paragraph(text="and then prose")]

    def test_text_after_closing_fence_joins_following_lines(self):
        blocks = tokenize("```\ncode\n```  see above\nfor details")
        assert blocks == [CodeBlock(text="code"), Paragraph(text="see above\nfor details")]

    def test_header_after_closing_fence(self):
        blocks = tokenize("```\ncode\n``` ## Next")
        assert blocks == [CodeBlock(text="code"), Header(level=2, text="Next")]

    def test_one_line_fence_is_closed_block(self):
        blocks = tokenize("```ls``` lists files\n\nNext paragraph")
        assert blocks == [
            CodeBlock(text="ls"),
            Paragraph(text="lists files"),
            Paragraph(text="Next paragraph"),
        ]

    def test_one_line_fence_alone(self):
        assert tokenize("``` pwd ```") == [CodeBlock(text="pwd")]

    def test_text_after_language_starts_code(self):
        blocks = tokenize("```python print(1)\nprint(2)\n```")
        assert blocks == [CodeBlock(text="print(1)\nprint(2)", language="python")]


class TestParagraphWhitespace:
    def test_each_line_trimmed(self):
        blocks = tokenize("  first\n    second  \n\tthird")
        assert blocks == [Paragraph(text="first\nsecond\nthird")]
