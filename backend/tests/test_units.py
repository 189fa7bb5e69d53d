import pytest

from balance_auditor.utils.units import format_units, is_zero_amount, parse_raw_amount


@pytest.mark.parametrize(
    "raw,decimals,expected",
    [
        ("1000000000000000000", 18, "1.0"),
        ("0xde0b6b3a7640000", 18, "1.0"),
        ("1500000", 6, "1.5"),
        ("12345", 2, "123.45"),
        ("100", 2, "1.0"),
        ("0", 18, "0.0"),
        ("0x0", 6, "0.0"),
        ("1", 18, "0.000000000000000001"),
        ("123456789", 0, "123456789"),
        (10**30, 18, "1000000000000.0"),
    ],
)
def test_format_units(raw, decimals, expected):
    assert format_units(raw, decimals) == expected


def test_format_units_defaults_to_eighteen_decimals():
    assert format_units("2500000000000000000") == "2.5"


def test_format_units_keeps_full_precision():
    raw = "123456789012345678901234567890"
    assert format_units(raw, 18) == "123456789012.34567890123456789"


@pytest.mark.parametrize(
    "raw",
    ["", "abc", "0xZZ", "1.5", None, "-5", "+7", "1_000", "0x1_0", "-0x10", "1 000", -5],
)
def test_format_units_rejects_malformed_amounts(raw):
    with pytest.raises(ValueError):
        format_units(raw, 18)


def test_format_units_rejects_negative_decimals():
    with pytest.raises(ValueError):
        format_units("1", -1)


def test_parse_raw_amount_accepts_uppercase_hex_prefix():
    assert parse_raw_amount("0XFF") == 255


@pytest.mark.parametrize(
    "formatted,expected",
    [
        ("0.0", True),
        ("0", True),
        ("0.000000000000000000", True),
        ("0.000000000000000001", False),
        ("1.0", False),
    ],
)
def test_is_zero_amount(formatted, expected):
    assert is_zero_amount(formatted) is expected


def test_format_units_accepts_surrounding_whitespace():
    assert format_units(" 0x10 ", 0) == "16"
