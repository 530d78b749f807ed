import pytest

from src.quoting_system.quoting_system.common.datetime_utils import elapsed_hours, parse_clock_hours
from src.quoting_system.quoting_system.core.exceptions import InvalidTimeFormat


def test_parse_clock_hours():
    assert parse_clock_hours("08:30") == 8.5
    assert parse_clock_hours("00:00") == 0
    assert parse_clock_hours("23:45") == 23.75


def test_elapsed_hours_same_day_and_overnight():
    assert elapsed_hours("08:00", "16:00") == 8
    assert elapsed_hours("22:30", "02:00") == 3.5
    assert elapsed_hours("10:00", "10:00") == 0


def test_parse_clock_hours_rejects_non_string():
    with pytest.raises(InvalidTimeFormat):
        parse_clock_hours(None)


def test_parse_clock_hours_rejects_superscript_digits():
    with pytest.raises(InvalidTimeFormat):
        parse_clock_hours("²:00")
