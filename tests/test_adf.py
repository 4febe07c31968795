"""Tests for jiralookup.integrations.adf module."""

from jiralookup.integrations.adf import extract_adf_text, extract_node_text


def _text(value):
    return {"type": "text", "text": value}


def _paragraph(*texts):
    return {"type": "paragraph", "content": [_text(t) for t in texts]}


def _list_item(value):
    return {"type": "listItem", "content": [_paragraph(value)]}


def _doc(*nodes):
    return {"type": "doc", "version": 1, "content": list(nodes)}


class TestExtractAdfText:
    """Tests for extract_adf_text."""

    def test_simple_paragraph(self):
        """Single paragraph yields its text."""
        assert extract_adf_text(_doc(_paragraph("Hello world"))) == "Hello world"

    def test_multiple_paragraphs_joined_with_newline(self):
        """Paragraphs go on separate lines; text inside one stays on a line."""
        doc = _doc(_paragraph("Hello "), _paragraph("world"))

        assert extract_adf_text(doc) == "Hello \nworld"

    def test_inline_text_nodes_concatenated(self):
        """Text nodes within a paragraph are joined without separator."""
        doc = _doc(_paragraph("Hello ", "brave ", "world"))

        assert extract_adf_text(doc) == "Hello brave world"

    def test_bullet_list(self):
        """Bullet list items are newline separated."""
        doc = _doc({"type": "bulletList", "content": [_list_item("Item 1"), _list_item("Item 2")]})

        assert extract_adf_text(doc) == "Item 1\nItem 2"

    def test_ordered_list(self):
        """Ordered list items are newline separated."""
        doc = _doc({"type": "orderedList", "content": [_list_item("First"), _list_item("Second")]})

        assert extract_adf_text(doc) == "First\nSecond"

    def test_heading(self):
        """Headings behave like paragraphs."""
        doc = _doc(
            {"type": "heading", "attrs": {"level": 2}, "content": [_text("Overview")]},
            _paragraph("Body"),
        )

        assert extract_adf_text(doc) == "Overview\nBody"

    def test_mixed_content(self):
        """Paragraphs and lists combine in document order."""
        doc = _doc(
            _paragraph("Steps:"),
            {"type": "bulletList", "content": [_list_item("Open"), _list_item("Click")]},
            _paragraph("Done"),
        )

        assert extract_adf_text(doc) == "Steps:\nOpen\nClick\nDone"

    def test_unknown_container_concatenates(self):
        """Unrecognized container types join children without separator."""
        doc = _doc({"type": "panel", "content": [_paragraph("a"), _paragraph("b")]})

        assert extract_adf_text(doc) == "ab"

    def test_none_document(self):
        """None yields empty string."""
        assert extract_adf_text(None) == ""

    def test_empty_document(self):
        """Document without content yields empty string."""
        assert extract_adf_text(_doc()) == ""

    def test_document_without_content_key(self):
        """Missing content list is tolerated."""
        assert extract_adf_text({"type": "doc"}) == ""

    def test_plain_string_passthrough(self):
        """Plain string descriptions are returned unchanged."""
        assert extract_adf_text("already plain") == "already plain"

    def test_empty_nodes_skipped(self):
        """Blocks that extract to nothing do not add blank lines."""
        doc = _doc(_paragraph("one"), {"type": "paragraph"}, _paragraph("two"))

        assert extract_adf_text(doc) == "one\ntwo"

    def test_malformed_children_ignored(self):
        """Non-object children and non-list content are skipped."""
        doc = _doc(
            {"type": "paragraph", "content": [None, "junk", _text("ok")]},
            {"type": "paragraph", "content": "not a list"},
        )

        assert extract_adf_text(doc) == "ok"


class TestExtractNodeText:
    """Tests for extract_node_text."""

    def test_none_node(self):
        """None node yields empty string."""
        assert extract_node_text(None) == ""

    def test_text_node_does_not_recurse(self):
        """Text nodes return their literal text only."""
        node = {"type": "text", "text": "leaf", "content": [_text("ignored")]}

        assert extract_node_text(node) == "leaf"

    def test_text_node_without_text(self):
        """Text node missing its text yields empty string."""
        assert extract_node_text({"type": "text"}) == ""
