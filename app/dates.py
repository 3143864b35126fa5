"""
Loose date normalization to YYYY-MM-DD.

Rules:
- Keep only digits and the separators "-", "/", ".".
- Three separated parts: a 4-digit first part means year-month-day,
  anything else means day-month-year (2-digit years are read as 20YY).
- Any other part count with exactly 8 digits: YYYYMMDD when the first
  four digits exceed 1900, else DDMMYYYY.
- Day 1-31, month 1-12, year 1900-2100. No calendar check beyond that.
- Anything that cannot be decomposed or fails the ranges is returned
  as the trimmed original.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from .rules import (
    COMPACT_DATE_LENGTH,
    DATE_SEPARATORS,
    MAX_YEAR,
    MIN_YEAR,
    TWO_DIGIT_YEAR_CENTURY,
)

_SEPARATOR_CLASS = "[" + re.escape(DATE_SEPARATORS) + "]"
_NOT_DATE_CHAR = re.compile(r"[^0-9" + re.escape(DATE_SEPARATORS) + r"]")
_SEPARATOR = re.compile(_SEPARATOR_CLASS)


class DateLayout(str, Enum):
    YMD = "YMD"
    DMY = "DMY"
    COMPACT_YMD = "COMPACT_YMD"
    COMPACT_DMY = "COMPACT_DMY"


@dataclass(frozen=True)
class DateMatch:
    layout: DateLayout
    year: str
    month: str
    day: str


Matcher = Callable[[str], Optional[DateMatch]]


def match_three_part(cleaned: str) -> Optional[DateMatch]:
    parts = _SEPARATOR.split(cleaned)
    if len(parts) != 3 or not all(parts):
        return None
    first, second, third = parts
    if len(first) == 4:
        return DateMatch(DateLayout.YMD, year=first, month=second, day=third)
    year = third
    if len(year) == 2:
        year = TWO_DIGIT_YEAR_CENTURY + year
    return DateMatch(DateLayout.DMY, year=year, month=second, day=first)


def match_compact(cleaned: str) -> Optional[DateMatch]:
    # Three separated parts belong to match_three_part, even when one is empty.
    if len(_SEPARATOR.split(cleaned)) == 3:
        return None
    digits = _SEPARATOR.sub("", cleaned)
    if len(digits) != COMPACT_DATE_LENGTH:
        return None
    if int(digits[:4]) > MIN_YEAR:
        return DateMatch(DateLayout.COMPACT_YMD, year=digits[:4], month=digits[4:6], day=digits[6:8])
    return DateMatch(DateLayout.COMPACT_DMY, year=digits[4:8], month=digits[2:4], day=digits[:2])


MATCHERS: Tuple[Matcher, ...] = (match_three_part, match_compact)


def clean_date_chars(value: str) -> str:
    return _NOT_DATE_CHAR.sub("", value)


def infer_date(value: str) -> Optional[DateMatch]:
    """Return the first layout that decomposes ``value``, or None."""
    cleaned = clean_date_chars(value)
    if not cleaned:
        return None
    for matcher in MATCHERS:
        match = matcher(cleaned)
        if match is not None:
            return match
    return None


def _in_range(year: int, month: int, day: int) -> bool:
    return 1 <= day <= 31 and 1 <= month <= 12 and MIN_YEAR <= year <= MAX_YEAR


def normalize_date(value: str) -> str:
    original = value.strip()
    if not original:
        return ""

    match = infer_date(original)
    if match is None:
        return original

    try:
        year, month, day = int(match.year), int(match.month), int(match.day)
    except ValueError:
        return original
    if not _in_range(year, month, day):
        return original

    return f"{year}-{month:02d}-{day:02d}"
