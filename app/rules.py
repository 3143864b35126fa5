"""
Deterministic cleaning rules.

This file exists to make the fixed rules explicit and enforceable.
"""

# Column role names, matched case-sensitively against trimmed header names.
ROLE_NUMBER = "Number"
ROLE_NAME = "Name"
ROLE_GENDER = "Gender"
ROLE_POINTS = "Points"
ROLE_BIRTHDAY = "Birthday"
ROLE_ANNIVERSARY = "Anniversary"

DELIMITER = ","
DATE_SEPARATORS = "-/."

# Phone numbers: a 12-digit number starting with this prefix loses it.
NATIONAL_NUMBER_LENGTH = 10
COUNTRY_PREFIX = "91"
PREFIXED_NUMBER_LENGTH = 12

# Date ranges accepted by the normalizer (inclusive).
MIN_YEAR = 1900
MAX_YEAR = 2100
COMPACT_DATE_LENGTH = 8
TWO_DIGIT_YEAR_CENTURY = "20"

OUTPUT_ENCODING = "utf-8"
OUTPUT_PREFIX = "cleaned_"
