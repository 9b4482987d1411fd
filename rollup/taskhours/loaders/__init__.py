"""Document loaders for taskhours."""

from taskhours.loaders.base import LoaderError
from taskhours.loaders.markdown import MarkdownLoader

__all__ = [
    "LoaderError",
    "MarkdownLoader",
]
