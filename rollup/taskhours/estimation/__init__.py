"""
Estimation module - rolls task durations up an outline.

Parses trailing duration tokens from list items and rewrites parent
items with the sum of their sub-items.
"""

from taskhours.estimation.aggregator import (
    DurationAggregator,
    estimate_tree,
    find_root_lists,
)
from taskhours.estimation.annotation import (
    TaskAnnotation,
    extract_annotation,
    format_duration,
    has_duration_suffix,
    rewrite_duration,
)

__all__ = [
    "DurationAggregator",
    "TaskAnnotation",
    "estimate_tree",
    "extract_annotation",
    "find_root_lists",
    "format_duration",
    "has_duration_suffix",
    "rewrite_duration",
]
