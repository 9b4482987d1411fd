"""
taskhours - roll sub-task hours up Markdown outlines.

Items in a Markdown list may end in a duration ("Design API 8h"). A
parent whose sub-items carry time gets its duration replaced by their
sum, bottom-up through every level of the outline.
"""

from taskhours.estimation import DurationAggregator, estimate_tree, extract_annotation
from taskhours.pipeline import EstimationConfig, ProcessingError, process_markdown

__version__ = "0.1.0"

__all__ = [
    "DurationAggregator",
    "EstimationConfig",
    "ProcessingError",
    "estimate_tree",
    "extract_annotation",
    "process_markdown",
]
