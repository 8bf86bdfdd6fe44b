"""Tests for numeric heuristics and display formatting."""

import pytest

from struk.extraction.heuristics import (
    SPLIT_TOKEN_PLACEHOLDER,
    TOKEN_PLACEHOLDER,
    amount_to_digits,
    format_kwh_digits,
    format_kwh_display,
    format_rp,
    format_rp_decimal,
    format_token,
    month_name,
    snap_denomination,
    split_token,
)


@pytest.mark.parametrize("value, expected", [
    ("42000", "50000"),
    ("18500", "20000"),
    ("100000", "100000"),
    ("98000", "100000"),
    # 16% band: a 15% band would leave this unchanged
    ("84000", "100000"),
    ("73000", "73000"),
    ("abc", "abc"),
    ("", ""),
])
def test_snap_denomination(value, expected):
    assert snap_denomination(value) == expected


def test_snap_prefers_lower_denomination_on_overlap():
    # 35000 is within 20% of both; ascending scan picks the first hit
    assert snap_denomination("35000", denominations=(40000, 30000), tolerance_percent=20) == "30000"


@pytest.mark.parametrize("value, expected", [
    ("46", "46,0"),
    ("3530", "35,3"),
    ("14090", "140,9"),
    ("1235", "12,4"),
    ("5", "5"),
    ("", ""),
])
def test_format_kwh_digits(value, expected):
    assert format_kwh_digits(value) == expected


def test_format_kwh_display():
    assert format_kwh_display("") == "0,0"
    assert format_kwh_display("3530") == "35.3KWH"
    assert format_kwh_display("35,3") == "35.3KWH"
    assert format_kwh_display("500") == "500.0KWH"
    assert format_kwh_display("n/a") == "n/a"


def test_format_rp():
    assert format_rp("1234567") == "1.234.567"
    assert format_rp("500") == "500"
    assert format_rp(1000) == "1.000"
    assert format_rp("") == "0"
    assert format_rp(None) == "0"


def test_format_rp_decimal():
    assert format_rp_decimal("") == "0,00"
    assert format_rp_decimal("0") == "0,00"
    assert format_rp_decimal("2,5") == "2,50"
    assert format_rp_decimal("1.5") == "1,50"
    assert format_rp_decimal("abc") == "abc"


def test_amount_to_digits_drops_cents():
    assert amount_to_digits("50.000,00") == "50000"
    assert amount_to_digits("2.500") == "2500"
    assert amount_to_digits("Rp 20,000") == "20000"
    assert amount_to_digits(None) == ""


def test_month_name():
    assert month_name("12") == "Desember"
    assert month_name("01") == "Januari"
    assert month_name(3) == "Maret"
    assert month_name("13") == "13"
    assert month_name("ab") == "ab"


def test_format_token():
    assert format_token("12345678901234567890") == "1234 5678 9012 3456 7890"
    assert format_token("") == TOKEN_PLACEHOLDER
    assert format_token(None) == TOKEN_PLACEHOLDER


def test_split_token():
    assert split_token("12345678901234567890") == "1234-5678-9012\n3456-7890\n"
    assert split_token("1234") == SPLIT_TOKEN_PLACEHOLDER
    assert split_token(None) == SPLIT_TOKEN_PLACEHOLDER
