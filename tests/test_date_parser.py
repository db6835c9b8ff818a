"""Tests for date parser."""

import pytest
from datetime import date
from supportbank.utils.date_parser import parse_date, parse_serial_date


def test_parse_iso_date():
    """Test ISO dates keep month before day."""
    assert parse_date("2020-01-02") == date(2020, 1, 2)


def test_parse_iso_datetime():
    """Test the time part of an ISO timestamp is dropped."""
    assert parse_date("2013-01-05T00:00:00") == date(2013, 1, 5)


def test_parse_day_first_date():
    """Test slash dates are read day first."""
    assert parse_date("01/02/2014") == date(2014, 2, 1)
    assert parse_date("31/12/2014") == date(2014, 12, 31)


@pytest.mark.parametrize("value", ["", "not a date", "31/13/2020", None, "5", "Jan", "Jan 2020", "12/2020"])
def test_parse_invalid_dates(value):
    """Test unparsable dates raise ValueError."""
    with pytest.raises(ValueError):
        parse_date(value)


def test_parse_serial_date():
    """Test spreadsheet serial day counts."""
    assert parse_serial_date("43831") == date(2020, 1, 1)
    assert parse_serial_date(25569) == date(1970, 1, 1)
    assert parse_serial_date("1") == date(1899, 12, 31)


@pytest.mark.parametrize("value", ["", "abc", "4383.5", None, "9999999999"])
def test_parse_invalid_serial_dates(value):
    """Test non-integer or out of range serials raise ValueError."""
    with pytest.raises(ValueError):
        parse_serial_date(value)


def test_parse_full_date_ignores_defaults():
    """Test complete dates are unaffected by partial date detection."""
    assert parse_date("29/02/2020") == date(2020, 2, 29)
    assert parse_date("31 Dec 1999") == date(1999, 12, 31)
