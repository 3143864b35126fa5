"""Render a header and records back to comma-delimited text."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from .rules import DELIMITER


def serialize(header: Sequence[str], records: Iterable[Mapping[str, str]]) -> str:
    # No quoting: values containing the delimiter are written as-is.
    lines = [DELIMITER.join(header)]
    for record in records:
        lines.append(DELIMITER.join(record.get(name) or "" for name in header))
    return "\n".join(lines)
