"""Unit tests for rich-text documents."""

import pytest

from widgetdesk.core.richtext import (
    BlockNode,
    Document,
    TextNode,
    UnknownNode,
    count_words,
    document_from_text,
    empty_document,
    parse_document,
    reading_time,
    to_html,
    to_plain_text,
)

SAMPLE = {
    "type": "doc",
    "content": [
        {
            "type": "heading",
            "attrs": {"level": 2},
            "content": [{"type": "text", "text": "Plan"}],
        },
        {
            "type": "paragraph",
            "content": [
                {"type": "text", "text": "Ship "},
                {"type": "text", "text": "v1", "marks": [{"type": "bold"}]},
            ],
        },
        {
            "type": "bulletList",
            "content": [
                {
                    "type": "listItem",
                    "content": [
                        {"type": "paragraph", "content": [{"type": "text", "text": "a"}]}
                    ],
                },
                {
                    "type": "listItem",
                    "content": [
                        {"type": "paragraph", "content": [{"type": "text", "text": "b"}]}
                    ],
                },
            ],
        },
    ],
}


@pytest.mark.unit
class TestParsing:
    def test_nodes_parse_into_variants(self):
        document = parse_document(SAMPLE)

        heading, paragraph, bullets = document.content
        assert isinstance(heading, BlockNode)
        assert heading.attrs.level == 2
        assert isinstance(paragraph.content[1], TextNode)
        assert paragraph.content[1].marks[0].type == "bold"
        assert bullets.type == "bulletList"

    def test_unknown_node_keeps_children(self):
        document = parse_document(
            {
                "type": "doc",
                "content": [
                    {
                        "type": "callout",
                        "emoji": "!",
                        "content": [{"type": "text", "text": "inside"}],
                    }
                ],
            }
        )

        node = document.content[0]
        assert isinstance(node, UnknownNode)
        assert to_plain_text(document) == "inside"
        assert to_html(document) == "inside"

    @pytest.mark.parametrize("raw", [None, {}, "", {"type": "doc", "content": "oops"}])
    def test_malformed_input_becomes_empty(self, raw):
        document = parse_document(raw)

        assert document.content == []
        assert to_plain_text(document) == ""

    def test_document_passes_through(self):
        document = empty_document()
        assert parse_document(document) is document


@pytest.mark.unit
class TestPlainText:
    def test_lines_after_paragraphs_and_headings(self):
        assert to_plain_text(parse_document(SAMPLE)) == "Plan\nShip v1\na\nb"

    def test_empty_document(self):
        assert to_plain_text(empty_document()) == ""

    def test_document_from_text_round_trip(self):
        assert to_plain_text(document_from_text("one\ntwo")) == "one\ntwo"


@pytest.mark.unit
class TestHtml:
    def test_block_and_mark_tags(self):
        assert to_html(parse_document(SAMPLE)) == (
            "<h2>Plan</h2>"
            "<p>Ship <strong>v1</strong></p>"
            "<ul><li><p>a</p></li><li><p>b</p></li></ul>"
        )

    def test_marks_wrap_innermost_first(self):
        document = Document(
            content=[
                BlockNode(
                    type="paragraph",
                    content=[
                        TextNode(
                            text="x",
                            marks=[{"type": "bold"}, {"type": "italic"}, {"type": "code"}],
                        )
                    ],
                )
            ]
        )

        assert to_html(document) == "<p><code><em><strong>x</strong></em></code></p>"

    def test_text_is_escaped(self):
        document = document_from_text("<script>alert('x')</script> & more")

        html = to_html(document)

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "&amp; more" in html

    @pytest.mark.parametrize("level,tag", [(None, "h1"), (0, "h1"), (3, "h3"), (9, "h6")])
    def test_heading_level_clamped(self, level, tag):
        document = parse_document(
            {
                "type": "doc",
                "content": [
                    {
                        "type": "heading",
                        "attrs": {"level": level},
                        "content": [{"type": "text", "text": "T"}],
                    }
                ],
            }
        )

        assert to_html(document) == f"<{tag}>T</{tag}>"

    def test_unknown_marks_ignored(self):
        document = Document(
            content=[
                BlockNode(
                    type="paragraph",
                    content=[TextNode(text="x", marks=[{"type": "sparkle"}])],
                )
            ]
        )
        assert to_html(document) == "<p>x</p>"


@pytest.mark.unit
class TestWordStatistics:
    def test_count_words(self):
        assert count_words("") == 0
        assert count_words("  one two\nthree ") == 3

    @pytest.mark.parametrize("words,minutes", [(0, 0), (1, 1), (200, 1), (201, 2), (1000, 5)])
    def test_reading_time_rounds_up(self, words, minutes):
        assert reading_time(words) == minutes
