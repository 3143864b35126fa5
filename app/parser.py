"""
Tabular parser.

Splits raw text into a header and keyed records. Fields are split on a
literal comma: there is no quote handling, so a comma inside a value shifts
the remaining columns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .errors import EmptyInputError, NoHeadersError
from .rules import DELIMITER

Record = Dict[str, str]


@dataclass
class Table:
    header: List[str]
    records: List[Record] = field(default_factory=list)


def split_fields(line: str) -> List[str]:
    return [value.strip() for value in line.split(DELIMITER)]


def build_record(header: List[str], values: List[str]) -> Record:
    """
    Map header names to values.

    Rules:
    - Missing trailing values become "".
    - Extra values beyond the header are dropped.
    - A repeated header name keeps the value of its first column.
    """
    record: Record = {}
    for index, name in enumerate(header):
        value = values[index] if index < len(values) else ""
        record.setdefault(name, value)
    return record


def parse_table(text: str) -> Table:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = [line for line in text.split("\n") if line.strip()]
    if not lines:
        raise EmptyInputError()

    header = split_fields(lines[0])
    # A header of only blank names has no usable columns.
    if not any(header):
        raise NoHeadersError()

    records = [build_record(header, split_fields(line)) for line in lines[1:]]
    return Table(header=header, records=records)
