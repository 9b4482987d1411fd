"""
Markdown exporter for taskhours.

Renders an OutlineDocument back to Markdown with mdformat's renderer,
working directly on the document's (possibly edited) token stream.
Raw HTML is written back verbatim.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from mdformat.renderer import MDRenderer

from taskhours.core.outline import OutlineDocument

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Raised when a document cannot be rendered."""

    def __init__(self, message: str, details: str | None = None):
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "details": self.details,
        }


class MarkdownExporter:
    """
    Render outline documents as Markdown text.

    Lists use ``-`` bullets; ordered lists are numbered consecutively
    unless ``consecutive_numbering`` is turned off.
    """

    EXPORTER_NAME: ClassVar[str] = "markdown"
    FILE_EXTENSION: ClassVar[str] = ".md"

    def __init__(self, consecutive_numbering: bool = True) -> None:
        self.consecutive_numbering = consecutive_numbering
        self._renderer = MDRenderer()

    def render(self, document: OutlineDocument) -> str:
        """Render a document to Markdown text."""
        options = self._render_options(document)
        try:
            text = self._renderer.render(document.tokens, options, document.env)
        except Exception as e:
            raise ExportError(f"Failed to render Markdown: {e}", details=str(e)) from e

        logger.debug("Rendered %d characters", len(text))
        return text

    def _render_options(self, document: OutlineDocument) -> dict[str, Any]:
        """Combine the parser options with the renderer's own settings."""
        options = dict(document.options)
        options["mdformat"] = {"number": self.consecutive_numbering, "wrap": "keep"}
        options["parser_extension"] = []
        options["codeformatters"] = {}
        return options
