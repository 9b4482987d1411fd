"""Tests for OutlineNode and OutlineDocument."""

from __future__ import annotations

import pytest
from markdown_it.token import Token

from taskhours.core.outline import NodeKind, OutlineDocument, OutlineNode


# ===================================================================
# Helpers
# ===================================================================


def _make_run(content: str, token_type: str = "text") -> OutlineNode:
    return OutlineNode(kind=NodeKind.TEXT_RUN, token=Token(token_type, "", 0, content=content))


def _make_paragraph(*runs: OutlineNode) -> OutlineNode:
    inline = Token("inline", "", 0, children=[run.token for run in runs])
    paragraph = OutlineNode(kind=NodeKind.PARAGRAPH, token=inline)
    for run in runs:
        paragraph.add_child(run)
    return paragraph


def _first_item(document: OutlineDocument) -> OutlineNode:
    return document.lists[0].items[0]


# ===================================================================
# NodeKind
# ===================================================================


class TestNodeKind:
    """Enum value tests."""

    def test_values(self):
        assert NodeKind.DOCUMENT.value == "document"
        assert NodeKind.LIST.value == "list"
        assert NodeKind.ITEM.value == "item"
        assert NodeKind.PARAGRAPH.value == "paragraph"
        assert NodeKind.TEXT_RUN.value == "text_run"
        assert NodeKind.BLOCK.value == "block"


# ===================================================================
# OutlineNode
# ===================================================================


class TestOutlineNode:
    """Tests for node structure helpers."""

    def test_node_id_prefix(self):
        assert OutlineNode(kind=NodeKind.ITEM).node_id.startswith("node_")

    def test_ids_are_unique(self):
        a = OutlineNode(kind=NodeKind.ITEM)
        b = OutlineNode(kind=NodeKind.ITEM)
        assert a.node_id != b.node_id

    def test_add_child_returns_child(self):
        parent = OutlineNode(kind=NodeKind.LIST)
        child = OutlineNode(kind=NodeKind.ITEM)
        assert parent.add_child(child) is child
        assert parent.children == [child]

    def test_items_filters_children(self):
        outline = OutlineNode(kind=NodeKind.LIST)
        item = outline.add_child(OutlineNode(kind=NodeKind.ITEM))
        outline.add_child(OutlineNode(kind=NodeKind.BLOCK))
        assert outline.items == [item]

    def test_paragraph_is_first_paragraph(self):
        item = OutlineNode(kind=NodeKind.ITEM)
        first = item.add_child(_make_paragraph(_make_run("A")))
        item.add_child(_make_paragraph(_make_run("B")))
        assert item.paragraph is first

    def test_paragraph_none_when_absent(self):
        item = OutlineNode(kind=NodeKind.ITEM)
        item.add_child(OutlineNode(kind=NodeKind.LIST))
        assert item.paragraph is None

    def test_sublists_in_order(self):
        item = OutlineNode(kind=NodeKind.ITEM)
        first = item.add_child(OutlineNode(kind=NodeKind.LIST))
        item.add_child(_make_paragraph(_make_run("A")))
        second = item.add_child(OutlineNode(kind=NodeKind.LIST))
        assert item.sublists == [first, second]

    def test_ordered_flag(self, load):
        document = load("1. A\n2. B\n\n- C\n")
        ordered, bullets = document.lists
        assert ordered.ordered
        assert not bullets.ordered

    def test_last_run(self):
        first, last = _make_run("A"), _make_run("B")
        paragraph = _make_paragraph(first, last)
        assert paragraph.last_run is last

    def test_last_run_none_without_runs(self):
        paragraph = OutlineNode(kind=NodeKind.PARAGRAPH, token=Token("inline", "", 0))
        assert paragraph.last_run is None


class TestRunText:
    """Tests for reading and writing run text."""

    def test_text_reads_token_content(self):
        assert _make_run("Build 3h").text == "Build 3h"

    def test_text_setter_writes_token(self):
        run = _make_run("Build 3h")
        run.text = "Build 4h"
        assert run.token.content == "Build 4h"

    def test_text_on_non_run_raises(self):
        item = OutlineNode(kind=NodeKind.ITEM)
        with pytest.raises(TypeError):
            _ = item.text
        with pytest.raises(TypeError):
            item.text = "x"


class TestPlainText:
    """Tests for plain-text rendering of paragraphs."""

    def test_simple_text(self, load):
        item = _first_item(load("- Design API 8h\n"))
        assert item.paragraph.plain_text == "Design API 8h"

    def test_emphasis_markup_dropped(self, load):
        item = _first_item(load("- **Design** API 8h\n"))
        assert item.paragraph.plain_text == "Design API 8h"

    def test_inline_code_content_kept(self, load):
        item = _first_item(load("- Run `make` 2h\n"))
        assert item.paragraph.plain_text == "Run make 2h"

    def test_soft_break_becomes_newline(self, load):
        item = _first_item(load("- Plan the\n  release 4h\n"))
        assert item.paragraph.plain_text == "Plan the\nrelease 4h"

    def test_link_text_kept(self, load):
        item = _first_item(load("- [Spec](http://example.com) 1h\n"))
        assert item.paragraph.plain_text == "Spec 1h"


class TestCarrierRun:
    """Tests for choosing the run that carries the duration."""

    def test_last_text_run_is_carrier(self, load):
        item = _first_item(load("- **Design** API 8h\n"))
        paragraph = item.paragraph
        runs_before = len(paragraph.runs)
        carrier = paragraph.carrier_run()
        assert carrier is paragraph.last_run
        assert carrier.text == " API 8h"
        assert len(paragraph.runs) == runs_before

    def test_appends_run_after_markup(self, load):
        item = _first_item(load("- Run `make`\n"))
        paragraph = item.paragraph
        inline_children = len(paragraph.token.children)
        carrier = paragraph.carrier_run()
        assert carrier is paragraph.last_run
        assert carrier.text == ""
        assert len(paragraph.token.children) == inline_children + 1
        assert paragraph.token.children[-1] is carrier.token

    def test_carrier_on_non_paragraph_raises(self):
        with pytest.raises(TypeError):
            OutlineNode(kind=NodeKind.ITEM).carrier_run()


class TestTraversal:
    """Tests for descendant iteration and serialization."""

    def test_iter_descendants_preorder(self):
        root = OutlineNode(kind=NodeKind.DOCUMENT)
        outline = root.add_child(OutlineNode(kind=NodeKind.LIST))
        item_a = outline.add_child(OutlineNode(kind=NodeKind.ITEM))
        nested = item_a.add_child(OutlineNode(kind=NodeKind.LIST))
        item_b = outline.add_child(OutlineNode(kind=NodeKind.ITEM))
        assert list(root.iter_descendants()) == [outline, item_a, nested, item_b]

    def test_to_dict_includes_run_text(self):
        paragraph = _make_paragraph(_make_run("A 1h"))
        data = paragraph.to_dict()
        assert data["kind"] == "paragraph"
        assert data["children"][0]["kind"] == "text_run"
        assert data["children"][0]["text"] == "A 1h"

    def test_to_dict_omits_empty_children(self):
        data = OutlineNode(kind=NodeKind.ITEM).to_dict()
        assert "children" not in data


# ===================================================================
# OutlineDocument
# ===================================================================


class TestOutlineDocument:
    """Tests for document-level helpers."""

    def test_lists_include_nested(self, load):
        document = load("- A\n  - B\n- C\n")
        assert len(document.lists) == 2

    def test_item_count(self, load):
        document = load("- A\n  - B\n- C\n")
        assert document.item_count == 3

    def test_to_dict(self, load):
        data = load("- A\n  - B\n").to_dict()
        assert data["item_count"] == 2
        assert data["list_count"] == 2
        assert data["root"]["kind"] == "document"
