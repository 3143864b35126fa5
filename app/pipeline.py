"""
Row cleaning pipeline.

Responsibilities:
- resolve role columns once per run
- normalize the Number column and drop rows repeating a seen number
- scrub Name, Gender, Points
- normalize Birthday and Anniversary dates

Every run owns its seen-number set, so concurrent calls share nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from .dates import normalize_date
from .parser import Record, parse_table
from .rules import (
    ROLE_ANNIVERSARY,
    ROLE_BIRTHDAY,
    ROLE_GENDER,
    ROLE_NAME,
    ROLE_NUMBER,
    ROLE_POINTS,
)
from .sanitizers import clean_gender, clean_name, clean_number, clean_points

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleanOptions:
    sanitize_fields: bool = True
    deduplicate: bool = True


@dataclass(frozen=True)
class ColumnRoles:
    """Header index per role; None when the header has no such column."""

    number: Optional[int] = None
    name: Optional[int] = None
    gender: Optional[int] = None
    points: Optional[int] = None
    birthday: Optional[int] = None
    anniversary: Optional[int] = None

    def as_names(self, header: Sequence[str]) -> Dict[str, Optional[str]]:
        return {
            ROLE_NUMBER: _name_at(header, self.number),
            ROLE_NAME: _name_at(header, self.name),
            ROLE_GENDER: _name_at(header, self.gender),
            ROLE_POINTS: _name_at(header, self.points),
            ROLE_BIRTHDAY: _name_at(header, self.birthday),
            ROLE_ANNIVERSARY: _name_at(header, self.anniversary),
        }


@dataclass
class CleanStats:
    rows_in: int = 0
    rows_out: int = 0
    duplicates_dropped: int = 0
    roles: Dict[str, Optional[str]] = field(default_factory=dict)


@dataclass
class CleanResult:
    header: List[str]
    records: List[Record]
    stats: CleanStats


def _name_at(header: Sequence[str], index: Optional[int]) -> Optional[str]:
    return None if index is None else header[index]


def _find(header: Sequence[str], role: str) -> Optional[int]:
    for index, name in enumerate(header):
        if name.strip() == role:
            return index
    return None


def resolve_roles(header: Sequence[str]) -> ColumnRoles:
    number = _find(header, ROLE_NUMBER)
    if number is None and header:
        number = 0
    return ColumnRoles(
        number=number,
        name=_find(header, ROLE_NAME),
        gender=_find(header, ROLE_GENDER),
        points=_find(header, ROLE_POINTS),
        birthday=_find(header, ROLE_BIRTHDAY),
        anniversary=_find(header, ROLE_ANNIVERSARY),
    )


def _apply(row: Record, column: Optional[str], rule: Callable[[str], str]) -> None:
    if column is not None and row.get(column):
        row[column] = rule(row[column])


def clean_records(
    header: Sequence[str],
    records: Sequence[Record],
    options: Optional[CleanOptions] = None,
) -> Tuple[List[Record], CleanStats]:
    options = options or CleanOptions()
    roles = resolve_roles(header)
    names = roles.as_names(header)
    number_column = names[ROLE_NUMBER]
    field_rules = [
        (names[ROLE_NAME], clean_name),
        (names[ROLE_GENDER], clean_gender),
        (names[ROLE_POINTS], clean_points),
        (names[ROLE_BIRTHDAY], normalize_date),
        (names[ROLE_ANNIVERSARY], normalize_date),
    ]

    stats = CleanStats(rows_in=len(records), roles=names)
    seen: Set[str] = set()
    cleaned: List[Record] = []

    for position, record in enumerate(records, start=1):
        row = dict(record)

        if number_column is not None:
            number = clean_number(row.get(number_column, ""))
            row[number_column] = number
            if number and options.deduplicate:
                if number in seen:
                    stats.duplicates_dropped += 1
                    logger.debug("Dropping row %d: duplicate number %s", position, number)
                    continue
                seen.add(number)

        if options.sanitize_fields:
            for column, rule in field_rules:
                _apply(row, column, rule)

        cleaned.append(row)

    stats.rows_out = len(cleaned)
    return cleaned, stats


def clean_text(raw_text: str, options: Optional[CleanOptions] = None) -> CleanResult:
    table = parse_table(raw_text)
    records, stats = clean_records(table.header, table.records, options)
    logger.info(
        "Cleaned %d rows into %d (%d duplicates dropped)",
        stats.rows_in,
        stats.rows_out,
        stats.duplicates_dropped,
    )
    return CleanResult(header=list(table.header), records=records, stats=stats)


def clean(raw_text: str, options: Optional[CleanOptions] = None) -> Tuple[List[str], List[Record]]:
    result = clean_text(raw_text, options)
    return result.header, result.records
