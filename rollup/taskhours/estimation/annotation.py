"""
Duration annotations on outline items.

An item's text may end in a duration token, a whole number of hours
written as ``<integer>h`` (e.g. "Design API 8h"). Only a trailing,
whitespace-delimited token counts; "8h of work" has no duration.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from taskhours.core.outline import OutlineNode

# A complete duration token: "8h", "120h"
_DURATION_TOKEN_RE = re.compile(r"^(\d+)h$", re.ASCII)
# A duration at the very end of a run's text
_DURATION_SUFFIX_RE = re.compile(r"(\d+)h\Z", re.ASCII)


@dataclass
class TaskAnnotation:
    """
    Label and duration parsed from an item's text.

    Attributes:
        label: Item text without the duration token.
        hours: Stated (or, after aggregation, computed) duration.
        carrier_id: node_id of the run holding the duration token.
    """

    label: str
    hours: int = 0
    carrier_id: str | None = None

    @property
    def has_time(self) -> bool:
        return self.hours > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "hours": self.hours,
            "carrier_id": self.carrier_id,
        }


def format_duration(hours: int) -> str:
    """Format hours as a duration token."""
    return f"{hours}h"


def extract_annotation(text: str) -> TaskAnnotation:
    """Split item text into a label and a duration in hours.

    Args:
        text: Rendered item text.

    Returns:
        TaskAnnotation with hours=0 when the text has no trailing
        duration token.

    Examples:
        "Design API 8h" -> ("Design API", 8)
        "Design API"    -> ("Design API", 0)
        "8h"            -> ("", 8)
    """
    stripped = text.strip()
    parts = stripped.rsplit(None, 1)
    if parts:
        match = _DURATION_TOKEN_RE.match(parts[-1])
        if match:
            label = parts[0].strip() if len(parts) == 2 else ""
            return TaskAnnotation(label=label, hours=int(match.group(1)))

    return TaskAnnotation(label=stripped)


def has_duration_suffix(text: str) -> bool:
    """Check whether text ends in a duration."""
    return _DURATION_SUFFIX_RE.search(text) is not None


def rewrite_duration(run: OutlineNode, hours: int) -> None:
    """Write a new duration into a text run.

    Replaces a trailing duration if the run has one, preserving the
    text before it, or appends " <hours>h" otherwise.

    Args:
        run: TEXT_RUN node carrying the item's duration.
        hours: New duration, a non-negative whole number of hours.
    """
    if hours < 0:
        raise ValueError(f"hours cannot be negative: {hours}")

    text = run.text
    token = format_duration(hours)
    if has_duration_suffix(text):
        run.text = _DURATION_SUFFIX_RE.sub(token, text, count=1)
    else:
        run.text = f"{text} {token}"
