import pytest

from sharecount.core.formatting import round_count


@pytest.mark.parametrize("digits", [0, 1, 2, 3, 5])
def test_zero_is_always_zero(digits):
    assert round_count(0, digits) == "0"


@pytest.mark.parametrize(
    "count, digits, expected",
    [
        (1234, 2, "1.2k"),
        (1500000, 2, "1.5m"),
        (2345678, 3, "2.35m"),
        (999, 2, "1k"),
        (990, 2, "990"),
        (45, 2, "45"),
        (5, 2, "5"),
        (10, 2, "10"),
        (1000, 2, "1k"),
        (123456, 2, "120k"),
        (987, 1, "1k"),
        (12, 1, "10"),
    ],
)
def test_rounds_and_abbreviates(count, digits, expected):
    assert round_count(count, digits) == expected


def test_ties_round_half_away_from_zero():
    assert round_count(1250, 2) == "1.3k"
    assert round_count(125, 2) == "130"
    assert round_count(-125, 2) == "-130"


def test_negative_counts_keep_sign_and_suffix():
    assert round_count(-1234, 2) == "-1.2k"
    assert round_count(-2500000, 2) == "-2.5m"


def test_fractional_and_string_input_truncated():
    assert round_count(1234.9, 2) == "1.2k"
    assert round_count("45", 2) == "45"


def test_non_numeric_raises():
    with pytest.raises(ValueError):
        round_count("lots", 2)


def test_precision_beyond_decimal_default():
    assert round_count(1234, 30) == "1.234k"
    assert round_count(1234567, 29) == "1.234567m"
    assert round_count(45, 40) == "45"
