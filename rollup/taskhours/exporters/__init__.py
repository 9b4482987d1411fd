"""Export formats for taskhours."""

from taskhours.exporters.markdown_export import ExportError, MarkdownExporter

__all__ = [
    "ExportError",
    "MarkdownExporter",
]
