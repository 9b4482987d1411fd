"""Markdown in, Markdown out: the task-hours processing pipeline.

Parses a document with the Markdown loader, rolls task durations up
each outline, and renders the result with the Markdown exporter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from taskhours.estimation.aggregator import DurationAggregator
from taskhours.exporters.markdown_export import MarkdownExporter
from taskhours.loaders.markdown import MarkdownLoader

logger = logging.getLogger(__name__)


# ===================================================================
# Errors
# ===================================================================


class ProcessingError(Exception):
    """Raised when a document cannot be parsed, estimated or rendered.

    Attributes:
        stage: Pipeline stage that failed ("parse", "estimate", "render").
        details: Optional text describing the underlying failure.
    """

    def __init__(self, message: str, stage: str, details: str | None = None):
        self.stage = stage
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "stage": self.stage,
            "details": self.details,
        }


# ===================================================================
# Configuration
# ===================================================================


@dataclass
class EstimationConfig:
    """Configuration for the processing pipeline.

    Attributes:
        debug: Trace every aggregation step. Has no effect on output.
        consecutive_numbering: Number ordered list items 1, 2, 3 when
            rendering instead of repeating the first number.
    """

    debug: bool = False
    consecutive_numbering: bool = True

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.debug else logging.WARNING

    def to_dict(self) -> dict[str, Any]:
        return {
            "debug": self.debug,
            "consecutive_numbering": self.consecutive_numbering,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EstimationConfig:
        return cls(
            debug=data.get("debug", False),
            consecutive_numbering=data.get("consecutive_numbering", True),
        )


# ===================================================================
# Pipeline
# ===================================================================


def process_markdown(markdown: str, config: EstimationConfig | None = None) -> str:
    """Roll up task durations in a Markdown document.

    Args:
        markdown: Full document text.
        config: Pipeline configuration. Defaults to EstimationConfig().

    Returns:
        The rendered document with parent durations updated.

    Raises:
        ProcessingError: If any stage fails. No partial output is produced.
    """
    config = config or EstimationConfig()

    try:
        document = MarkdownLoader().load_text(markdown)
    except Exception as e:
        raise ProcessingError(f"Failed to parse Markdown: {e}", stage="parse", details=str(e)) from e

    aggregator = DurationAggregator()
    try:
        aggregator.run(document)
    except Exception as e:
        raise ProcessingError(
            f"Failed to estimate task hours: {e}", stage="estimate", details=str(e)
        ) from e

    try:
        output = MarkdownExporter(consecutive_numbering=config.consecutive_numbering).render(document)
    except Exception as e:
        raise ProcessingError(f"Failed to render Markdown: {e}", stage="render", details=str(e)) from e

    logger.info(
        "Processed %d item(s), updated %d", len(aggregator.annotations), aggregator.updated_count
    )
    return output
