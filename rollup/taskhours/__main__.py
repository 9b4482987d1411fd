"""Entry point for ``python -m taskhours``."""

from __future__ import annotations

import sys

from taskhours.cli import main

if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
