"""Core data models for taskhours."""

from taskhours.core.outline import NodeKind, OutlineDocument, OutlineNode

__all__ = [
    "NodeKind",
    "OutlineDocument",
    "OutlineNode",
]
