"""
Tests for calendar helpers.
"""
from datetime import date

from bplog.utils.dates import (
    date_label,
    is_day_offset,
    parse_iso_date,
    resolve_date_arg,
    shift_date,
    short_label,
)

TODAY = date(2024, 6, 15)  # a Saturday


def test_parse_iso_date():
    assert parse_iso_date('2024-06-01') == date(2024, 6, 1)
    assert parse_iso_date(' 2024-06-01 ') == date(2024, 6, 1)
    assert parse_iso_date('2024-6-1') is None
    assert parse_iso_date('2024-02-30') is None
    assert parse_iso_date(None) is None


def test_is_day_offset():
    assert is_day_offset('-1')
    assert is_day_offset('-14')
    assert is_day_offset('+2')
    assert not is_day_offset('1')
    assert not is_day_offset('-x')
    assert not is_day_offset('2024-06-01')


def test_resolve_date_arg():
    assert resolve_date_arg(None, TODAY) == TODAY
    assert resolve_date_arg('-1', TODAY) == date(2024, 6, 14)
    assert resolve_date_arg('-3', TODAY) == date(2024, 6, 12)
    assert resolve_date_arg('+2', TODAY) == date(2024, 6, 17)
    assert resolve_date_arg('2024-12-25', TODAY) == date(2024, 12, 25)
    assert resolve_date_arg('soon', TODAY) == TODAY


def test_shift_date_is_bounded_at_today():
    assert shift_date(TODAY, -1, TODAY) == date(2024, 6, 14)
    assert shift_date(date(2024, 6, 14), 1, TODAY) == TODAY
    assert shift_date(TODAY, 1, TODAY) == TODAY


def test_date_label():
    assert date_label(TODAY, TODAY) == 'Today'
    assert date_label(date(2024, 6, 14), TODAY) == 'Yesterday'
    assert date_label(date(2024, 6, 11), TODAY) == 'Tuesday'
    assert date_label(date(2024, 6, 1), TODAY) == 'Jun 1'


def test_short_label():
    assert short_label(date(2024, 12, 25)) == 'Dec 25'
