import pytest

from app.sanitizers import clean_gender, clean_name, clean_number, clean_points


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("+919876543210", "9876543210"),
        ("9876543210", "9876543210"),
        ("+91-98765-43210", "9876543210"),
        ("(022) 2345 6789", "02223456789"),
        ("0919876543210", "0919876543210"),
        ("919876", "919876"),
        ("44 20 7946 0958 1", "4420794609581"),
        ("n/a", ""),
        ("", ""),
    ],
)
def test_clean_number(raw, expected):
    assert clean_number(raw) == expected

def test_clean_number_only_strips_prefix_at_twelve_digits():
    assert clean_number("91 1234 567 890") == "1234567890"
    assert clean_number("911234567890 1") == "9112345678901"

def test_clean_name():
    assert clean_name("John3 Doe!") == "John Doe"
    assert clean_name("  Mary-Jane  O'Neil ") == "MaryJane  ONeil"
    assert clean_name("123") == ""

def test_clean_gender():
    assert clean_gender(" F e m a l e ") == "Female"
    assert clean_gender("M.") == "M"

def test_clean_points():
    assert clean_points(" 1,200 pts") == "1200"
    assert clean_points("-") == ""

def test_sanitizers_are_idempotent():
    for rule, raw in [
        (clean_number, "+91 98765 43210"),
        (clean_name, "J0hn Doe!"),
        (clean_gender, "M@le"),
        (clean_points, "1O0"),
    ]:
        once = rule(raw)
        assert rule(once) == once
