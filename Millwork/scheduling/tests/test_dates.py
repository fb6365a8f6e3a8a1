import datetime

import pytest

from scheduling.dates import format_date, parse_date, parse_optional_date
from scheduling.exceptions import InvalidInput


def test_parse_day_month_year():
    assert parse_date("05/09/2025") == datetime.date(2025, 9, 5)
    assert parse_date(" 5/9/2025 ") == datetime.date(2025, 9, 5)


def test_parse_accepts_date_objects():
    day = datetime.date(2025, 9, 19)
    assert parse_date(day) is day
    assert parse_date(datetime.datetime(2025, 9, 19, 17, 30)) == day


@pytest.mark.parametrize("value", ["2025-09-19", "19-09-2025", "31/02/2025", "13/13/2025", "", None, 20250919])
def test_parse_rejects_bad_values(value):
    with pytest.raises(InvalidInput):
        parse_date(value)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        parse_date("not a date")


def test_parse_optional_date():
    assert parse_optional_date(None) is None
    assert parse_optional_date("   ") is None
    assert parse_optional_date("01/01/2026") == datetime.date(2026, 1, 1)


def test_format_date():
    assert format_date(datetime.date(2025, 9, 5)) == "05/09/2025"
    assert format_date(datetime.datetime(2025, 9, 5, 8, 0)) == "05/09/2025"
    assert format_date(None) == ""


@pytest.mark.parametrize("value", ["١٩/٠٩/٢٠٢٥", "19/09/２０２５", "19/09/2025\n1"])
def test_only_ascii_digits_are_dates(value):
    with pytest.raises(InvalidInput):
        parse_date(value)
