"""
Bottom-up roll-up of task durations in an outline.

Each list item may state a duration ("Build 8h"). When an item has
sub-items carrying time, its duration becomes the sum of its direct
sub-items' durations and its text is rewritten to match.

Rules:
- **Children first:** sub-items are aggregated before their parent, so
  a parent sums its children's already updated totals.
- **Only timed children count:** a parent is rewritten only if at least
  one direct child has a positive duration. Items whose children are all
  zero (or untimed) keep their own stated duration.
- **No needless edits:** when the sum already matches, the text is left
  byte-identical.
- **Skip items without text:** an item with no paragraph, or a blank
  one, is skipped together with everything nested inside it. Its
  sub-items are never visited and it contributes nothing to its parent.

Computed annotations live in a map keyed by node id, owned by the
aggregator for one pass. Only the carrier runs' text is written back
into the tree.
"""

from __future__ import annotations

import logging

from taskhours.core.outline import NodeKind, OutlineDocument, OutlineNode
from taskhours.estimation.annotation import (
    TaskAnnotation,
    extract_annotation,
    rewrite_duration,
)

logger = logging.getLogger(__name__)


def find_root_lists(root: OutlineNode) -> list[OutlineNode]:
    """Find the outermost lists under a node, in document order.

    The search does not descend into a list once found; lists nested in
    its items are reached through the items themselves.
    """
    found: list[OutlineNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.kind is NodeKind.LIST:
            found.append(node)
            continue
        stack.extend(reversed(node.children))
    return found


class DurationAggregator:
    """Recomputes parent durations from their sub-items."""

    def __init__(self) -> None:
        self._annotations: dict[str, TaskAnnotation] = {}
        self._updated: list[str] = []

    @property
    def annotations(self) -> dict[str, TaskAnnotation]:
        """Annotations computed so far, keyed by item node_id."""
        return dict(self._annotations)

    @property
    def updated_count(self) -> int:
        """Number of items whose text was rewritten."""
        return len(self._updated)

    def annotation_for(self, item: OutlineNode) -> TaskAnnotation | None:
        return self._annotations.get(item.node_id)

    def run(self, document: OutlineDocument) -> OutlineDocument:
        """Aggregate every outline in a document, in place.

        Args:
            document: Parsed document. Mutated in place.

        Returns:
            The same document.
        """
        self._annotations = {}
        self._updated = []

        root_lists = find_root_lists(document.root)
        logger.debug("Estimating task hours in %d root list(s)", len(root_lists))

        for outline in root_lists:
            for item in outline.items:
                self.aggregate(item)

        logger.debug("Updated %d item(s)", self.updated_count)
        return document

    def aggregate(self, item: OutlineNode) -> None:
        """Aggregate one item and everything nested under it."""
        if item.kind is not NodeKind.ITEM:
            return

        paragraph = item.paragraph
        runs = paragraph.runs if paragraph is not None else []
        if paragraph is None or not runs:
            logger.debug("Skipping item %s: no paragraph", item.node_id)
            return

        text = paragraph.plain_text
        if not text.strip():
            logger.debug("Skipping item %s: empty paragraph", item.node_id)
            return

        annotation = extract_annotation(text)
        annotation.carrier_id = runs[-1].node_id
        self._annotations[item.node_id] = annotation
        logger.debug('Parsed item "%s": %dh', annotation.label, annotation.hours)

        children_hours = 0
        has_child_with_time = False

        for sublist in item.sublists:
            for child in sublist.items:
                self.aggregate(child)

                child_annotation = self._annotations.get(child.node_id)
                if child_annotation is not None and child_annotation.has_time:
                    children_hours += child_annotation.hours
                    has_child_with_time = True
                    logger.debug(
                        'Sub-item "%s": %dh', child_annotation.label, child_annotation.hours
                    )

        if not has_child_with_time:
            return

        logger.debug(
            'Item "%s": sub-items total %dh, stated %dh',
            annotation.label,
            children_hours,
            annotation.hours,
        )
        if children_hours == annotation.hours:
            return

        logger.debug(
            'Updating item "%s": %dh -> %dh',
            annotation.label,
            annotation.hours,
            children_hours,
        )
        run = paragraph.carrier_run()
        rewrite_duration(run, children_hours)
        annotation.hours = children_hours
        annotation.carrier_id = run.node_id
        self._updated.append(item.node_id)


def estimate_tree(document: OutlineDocument) -> OutlineDocument:
    """Roll up task durations in a document, in place."""
    return DurationAggregator().run(document)
