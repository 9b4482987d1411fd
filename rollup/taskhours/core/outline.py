"""
Outline document model for taskhours.

A typed view over a markdown-it-py token stream. Nodes keep a reference
to the token they were built from, so text written through a TEXT_RUN
node is seen by any renderer that works on the same token stream.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from markdown_it.token import Token


class NodeKind(Enum):
    """Kinds of nodes in an outline tree."""

    DOCUMENT = "document"
    LIST = "list"
    ITEM = "item"
    PARAGRAPH = "paragraph"
    TEXT_RUN = "text_run"
    BLOCK = "block"  # Headings, quotes, code, HTML and anything else


# Inline token types whose content is rendered text
_TEXT_TYPES = frozenset({"text", "text_special", "code_inline", "html_inline", "image"})
_BREAK_TYPES = frozenset({"softbreak", "hardbreak"})


def _generate_node_id() -> str:
    return f"node_{uuid.uuid4().hex[:12]}"


@dataclass(eq=False)
class OutlineNode:
    """
    A node in the outline tree.

    The meaning of ``token`` depends on the kind:
    - LIST, ITEM, BLOCK: the opening (or self-closing) block token
    - PARAGRAPH: the ``inline`` token holding the paragraph's runs
    - TEXT_RUN: one child token of the paragraph's ``inline`` token
    - DOCUMENT: None
    """

    kind: NodeKind
    token: Token | None = None
    children: list[OutlineNode] = field(default_factory=list)
    node_id: str = field(default_factory=_generate_node_id)

    def add_child(self, child: OutlineNode) -> OutlineNode:
        """Add a child node and return it."""
        self.children.append(child)
        return child

    # ------------------------------------------------------------------
    # Lists and items
    # ------------------------------------------------------------------

    @property
    def ordered(self) -> bool:
        """True for an ordered (numbered) list."""
        return (
            self.kind is NodeKind.LIST
            and self.token is not None
            and self.token.type == "ordered_list_open"
        )

    @property
    def items(self) -> list[OutlineNode]:
        """Item children of a list."""
        return [child for child in self.children if child.kind is NodeKind.ITEM]

    @property
    def paragraph(self) -> OutlineNode | None:
        """First paragraph child of an item, or None."""
        for child in self.children:
            if child.kind is NodeKind.PARAGRAPH:
                return child
        return None

    @property
    def sublists(self) -> list[OutlineNode]:
        """Lists nested directly under an item, in document order."""
        return [child for child in self.children if child.kind is NodeKind.LIST]

    # ------------------------------------------------------------------
    # Paragraphs and runs
    # ------------------------------------------------------------------

    @property
    def runs(self) -> list[OutlineNode]:
        """Inline runs of a paragraph."""
        return [child for child in self.children if child.kind is NodeKind.TEXT_RUN]

    @property
    def last_run(self) -> OutlineNode | None:
        runs = self.runs
        return runs[-1] if runs else None

    @property
    def text(self) -> str:
        """Text of a run (the token's content)."""
        if self.kind is not NodeKind.TEXT_RUN or self.token is None:
            raise TypeError(f"{self.kind.value} node has no run text")
        return self.token.content

    @text.setter
    def text(self, value: str) -> None:
        if self.kind is not NodeKind.TEXT_RUN or self.token is None:
            raise TypeError(f"{self.kind.value} node has no run text")
        self.token.content = value

    @property
    def plain_text(self) -> str:
        """
        Plain-text rendering of a paragraph or run.

        Markup tokens (emphasis, links) contribute nothing, line breaks
        become newlines, inline code and HTML contribute their content.
        """
        if self.kind is NodeKind.TEXT_RUN:
            if self.token is None:
                return ""
            if self.token.type in _BREAK_TYPES:
                return "\n"
            if self.token.type in _TEXT_TYPES:
                return self.token.content
            return ""
        return "".join(child.plain_text for child in self.children)

    def carrier_run(self) -> OutlineNode:
        """
        Get the run that carries a paragraph's duration token.

        This is the last run when it is plain text. Otherwise an empty
        text run is appended to both the tree and the inline token, so
        that text written to it renders after the trailing markup.
        """
        if self.kind is not NodeKind.PARAGRAPH or self.token is None:
            raise TypeError(f"{self.kind.value} node has no runs")

        last = self.last_run
        if last is not None and last.token is not None and last.token.type == "text":
            return last

        run_token = Token("text", "", 0, content="")
        if self.token.children is None:
            self.token.children = []
        self.token.children.append(run_token)
        return self.add_child(OutlineNode(kind=NodeKind.TEXT_RUN, token=run_token))

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def iter_descendants(self) -> Iterator[OutlineNode]:
        """Yield all descendants in document order (pre-order)."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.node_id,
            "kind": self.kind.value,
        }
        if self.token is not None:
            result["token_type"] = self.token.type
        if self.kind is NodeKind.TEXT_RUN and self.token is not None:
            result["text"] = self.token.content
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


@dataclass
class OutlineDocument:
    """
    A parsed outline document.

    Holds the token stream and parser state needed to render the
    document again, plus the typed tree built over the tokens.
    """

    root: OutlineNode
    tokens: list[Token] = field(default_factory=list)
    options: Mapping[str, Any] = field(default_factory=dict)
    env: dict[str, Any] = field(default_factory=dict)
    source: str = ""

    @property
    def lists(self) -> list[OutlineNode]:
        """All list nodes, nested ones included, in document order."""
        return [node for node in self.root.iter_descendants() if node.kind is NodeKind.LIST]

    @property
    def item_count(self) -> int:
        return sum(1 for node in self.root.iter_descendants() if node.kind is NodeKind.ITEM)

    def to_dict(self) -> dict[str, Any]:
        return {
            "item_count": self.item_count,
            "list_count": len(self.lists),
            "root": self.root.to_dict(),
        }
