"""Per-column scrubbing rules. Each function takes and returns a string."""

from __future__ import annotations

import re

from .rules import COUNTRY_PREFIX, NATIONAL_NUMBER_LENGTH, PREFIXED_NUMBER_LENGTH

_NON_DIGIT = re.compile(r"[^0-9]")
_NON_NAME_CHAR = re.compile(r"[^a-zA-Z\s]")
_NON_LETTER = re.compile(r"[^a-zA-Z]")


def clean_number(value: str) -> str:
    """
    Reduce a phone number to digits.

    A 12-digit result starting with the country prefix "91" is cut down to
    the 10-digit national number; every other length is left alone.
    """
    digits = _NON_DIGIT.sub("", value)
    if (
        len(digits) > NATIONAL_NUMBER_LENGTH
        and len(digits) == PREFIXED_NUMBER_LENGTH
        and digits.startswith(COUNTRY_PREFIX)
    ):
        digits = digits[len(COUNTRY_PREFIX):]
    return digits


def clean_name(value: str) -> str:
    return _NON_NAME_CHAR.sub("", value).strip()


def clean_gender(value: str) -> str:
    return _NON_LETTER.sub("", value).strip()


def clean_points(value: str) -> str:
    return _NON_DIGIT.sub("", value).strip()
