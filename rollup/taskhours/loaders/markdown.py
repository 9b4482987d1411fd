"""
Markdown outline loader using markdown-it-py.

Parses Markdown into a token stream and builds the typed outline tree
over it. The tokens are kept so the document can be rendered again.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from markdown_it import MarkdownIt
from markdown_it.token import Token

from taskhours.core.outline import NodeKind, OutlineDocument, OutlineNode
from taskhours.loaders.base import LoaderError

logger = logging.getLogger(__name__)

_LIST_OPEN = frozenset({"bullet_list_open", "ordered_list_open"})
# Openers whose content is parsed as inline text, not nested blocks
_INLINE_OPEN = frozenset({"paragraph_open", "heading_open"})

# Block nesting depth; each outline level takes two (list and item)
DEFAULT_MAX_NESTING = 200


class MarkdownLoader:
    """
    Load Markdown outlines using markdown-it-py.

    Builds:
    - LIST nodes for bullet and ordered lists
    - ITEM nodes for list items
    - PARAGRAPH nodes with one TEXT_RUN per inline token
    - BLOCK nodes for everything else (headings, quotes, code, HTML)

    markdown-it stops parsing block content at ``max_nesting`` levels and
    drops whatever lies below. A document that deep is rejected with
    LoaderError rather than loaded with content missing.
    """

    LOADER_NAME: ClassVar[str] = "markdown"

    def __init__(self, max_nesting: int = DEFAULT_MAX_NESTING) -> None:
        self.max_nesting = max_nesting
        self._md = MarkdownIt("commonmark", {"maxNesting": max_nesting})
        # Keep reference labels on link tokens so they render as references
        self._md.options["store_labels"] = True

    def load_text(self, content: str) -> OutlineDocument:
        """Parse Markdown text into an OutlineDocument."""
        env: dict = {}
        try:
            tokens = self._md.parse(content, env)
            self._check_nesting(tokens)
            root = self._build_tree(tokens)
        except LoaderError:
            raise
        except Exception as e:
            raise LoaderError(f"Failed to parse Markdown: {e}", details=str(e)) from e

        document = OutlineDocument(
            root=root,
            tokens=tokens,
            options=self._md.options,
            env=env,
            source=content,
        )
        logger.debug(
            "Loaded %d tokens, %d lists, %d items",
            len(tokens),
            len(document.lists),
            document.item_count,
        )
        return document

    def _check_nesting(self, tokens: list[Token]) -> None:
        """Raise if the parser hit its nesting limit.

        A block container opened at level ``max_nesting - 1`` has its
        content parsed at ``max_nesting``, where markdown-it stops.
        """
        limit = self.max_nesting - 1
        for token in tokens:
            if (
                token.block
                and token.nesting == 1
                and token.level >= limit
                and token.type not in _INLINE_OPEN
            ):
                raise LoaderError(
                    "Document is nested too deeply",
                    details=(
                        f"{token.type} at line {self._line(token)} reaches "
                        f"nesting level {token.level} (limit {self.max_nesting})"
                    ),
                )

    def _build_tree(self, tokens: list[Token]) -> OutlineNode:
        """Build the outline tree from a flat token stream."""
        root = OutlineNode(kind=NodeKind.DOCUMENT)
        stack = [root]

        for token in tokens:
            if token.nesting == 1:
                node = self._open_node(token)
                stack[-1].add_child(node)
                stack.append(node)

            elif token.nesting == -1:
                if len(stack) == 1:
                    raise LoaderError(
                        "Unbalanced token stream",
                        details=f"Unexpected {token.type} at line {self._line(token)}",
                    )
                stack.pop()

            elif token.type == "inline" and stack[-1].kind is NodeKind.PARAGRAPH:
                self._process_inline(stack[-1], token)

            else:
                stack[-1].add_child(OutlineNode(kind=NodeKind.BLOCK, token=token))

        if len(stack) != 1:
            raise LoaderError(
                "Unbalanced token stream",
                details=f"{len(stack) - 1} unclosed block(s)",
            )
        return root

    def _open_node(self, token: Token) -> OutlineNode:
        """Create the node for an opening token."""
        if token.type in _LIST_OPEN:
            return OutlineNode(kind=NodeKind.LIST, token=token)

        elif token.type == "list_item_open":
            return OutlineNode(kind=NodeKind.ITEM, token=token)

        elif token.type == "paragraph_open":
            # The inline token becomes the paragraph's token
            return OutlineNode(kind=NodeKind.PARAGRAPH)

        return OutlineNode(kind=NodeKind.BLOCK, token=token)

    def _process_inline(self, paragraph: OutlineNode, token: Token) -> None:
        """Attach an inline token and its runs to a paragraph."""
        paragraph.token = token
        for child in token.children or []:
            paragraph.add_child(OutlineNode(kind=NodeKind.TEXT_RUN, token=child))

    @staticmethod
    def _line(token: Token) -> int | str:
        return token.map[0] + 1 if token.map else "?"
