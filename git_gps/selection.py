"""Parse line selections typed on the command line."""

from __future__ import annotations

import re
from pathlib import Path

from .exceptions import ValidationError
from .models import LineSelection

_LINE_RE = re.compile(r"^\s*L?(\d+)\s*(?:[-:,]\s*L?(\d+))?\s*$", re.IGNORECASE)
_LOCATION_RE = re.compile(r"^(?P<path>.+?):(?P<lines>L?\d+(?:[-:,]L?\d+)?)$", re.IGNORECASE)


def parse_line_selection(text: str) -> LineSelection:
    """Parse `12`, `12-15`, `12:15`, `12,15`, `L12` or `L12-L15`.

    A reversed range is accepted and put back in order.
    """

    match = _LINE_RE.match(text)
    if not match:
        raise ValidationError(f"Invalid line selection: {text!r}. Expected e.g. 12 or 12-15.")
    start = int(match.group(1))
    end = int(match.group(2)) if match.group(2) else start
    if end < start:
        start, end = end, start
    return LineSelection(start, end)


def split_location(location: str) -> tuple[Path, LineSelection | None]:
    """Split `path/to/file.py:12-15` into the path and its selection."""

    match = _LOCATION_RE.match(location)
    if match and not Path(location).exists():
        return Path(match.group("path")), parse_line_selection(match.group("lines"))
    return Path(location), None
