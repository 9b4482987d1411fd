"""Command-line interface: roll up task hours in a Markdown outline.

Reads a Markdown document from stdin and writes the updated document
to stdout::

    taskhours < plan.md > plan.estimated.md
    taskhours --debug < plan.md
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable

from taskhours.pipeline import EstimationConfig, ProcessingError, process_markdown

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error processing Markdown:"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskhours",
        description="Sum sub-task hours into their parent items in a Markdown outline",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Trace each aggregation step on stderr",
    )
    return parser


def read_markdown(stream: Iterable[str]) -> str:
    """Accumulate lines until end of input, each ending in a newline."""
    return "".join(line if line.endswith("\n") else line + "\n" for line in stream)


def configure_logging(config: EstimationConfig) -> None:
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("taskhours").setLevel(config.log_level)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = EstimationConfig(debug=args.debug)
    configure_logging(config)

    markdown = read_markdown(sys.stdin)
    try:
        output = process_markdown(markdown, config)
    except ProcessingError as exc:
        logger.debug("Processing failed at stage %s", exc.stage, exc_info=True)
        sys.stderr.write(f"{ERROR_PREFIX} {exc}\n")
        return 1

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
