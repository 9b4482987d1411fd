"""
Pytest configuration and fixtures for taskhours tests.
"""

import pytest

from taskhours.core.outline import OutlineDocument
from taskhours.loaders.markdown import MarkdownLoader


@pytest.fixture
def loader() -> MarkdownLoader:
    return MarkdownLoader()


@pytest.fixture
def load(loader: MarkdownLoader):
    """Parse Markdown text into an OutlineDocument."""

    def _load(content: str) -> OutlineDocument:
        return loader.load_text(content)

    return _load


@pytest.fixture
def sample_plan() -> str:
    """A release plan with stale and missing parent estimates."""
    return """# Release plan

- Backend 10h
  - Design API 8h
  - Implement endpoints 12h
  - Write tests 6h
- Frontend
  - Layout 4h
  - Forms
    - Login form 3h
    - Signup form 5h
- Docs 2h
"""


@pytest.fixture
def sample_plan_estimated() -> str:
    """sample_plan after rolling up the hours."""
    return """# Release plan

- Backend 26h
  - Design API 8h
  - Implement endpoints 12h
  - Write tests 6h
- Frontend 12h
  - Layout 4h
  - Forms 8h
    - Login form 3h
    - Signup form 5h
- Docs 2h
"""
