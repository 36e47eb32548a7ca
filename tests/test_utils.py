import socket
import time
from datetime import date, timedelta

import pytest

from algendado.utils import (
    combine_datetime,
    format_date_for_display,
    format_time_for_display,
    is_same_day,
    is_same_month,
    is_same_week,
    parse_date_input,
    parse_time_input,
    server_is_running,
)


def _ts(year, month, day, hour=12, minute=0, second=0):
    return int(time.mktime((year, month, day, hour, minute, second, 0, 0, -1)))


def test_parse_date_today():
    today = date(2025, 7, 15)
    assert parse_date_input("today", today=today) == today.isoformat()


def test_parse_date_tomorrow_crosses_year():
    today = date(2025, 12, 31)
    assert parse_date_input("tomorrow", today=today) == date(2026, 1, 1).isoformat()


def test_parse_date_explicit():
    assert parse_date_input("15/07/2025") == date(2025, 7, 15).isoformat()


@pytest.mark.parametrize("text", ["2025-07-15", "next week", "15/07", "31/02/2025", ""])
def test_parse_date_invalid(text):
    with pytest.raises(ValueError):
        parse_date_input(text, today=date(2025, 7, 15))


def test_parse_time_full():
    assert parse_time_input("11:15:00") == "11:15:00"


def test_parse_time_short_is_padded():
    assert parse_time_input("14:30") == "14:30:00"
    assert parse_time_input("9:5") == "09:05:00"


def test_parse_time_bad_seconds_falls_back_to_minutes():
    assert parse_time_input("10:30:99") == "10:30:00"


@pytest.mark.parametrize("text", ["24:00", "12:60", "noon", "12", "-1:00"])
def test_parse_time_invalid(text):
    with pytest.raises(ValueError):
        parse_time_input(text)


def test_combine_datetime_round_trip():
    stamp = combine_datetime("2025-07-15", "09:05:30")
    local = time.localtime(stamp)
    assert (local.tm_year, local.tm_mon, local.tm_mday) == (2025, 7, 15)
    assert (local.tm_hour, local.tm_min, local.tm_sec) == (9, 5, 30)


def test_combine_datetime_orders_times():
    assert combine_datetime("2025-07-15", "09:00:00") < combine_datetime("2025-07-15", "09:00:01")
    assert combine_datetime("2025-07-15", "23:59:59") < combine_datetime("2025-07-16", "00:00:00")


@pytest.mark.parametrize("day, clock", [("15/07/2025", "09:00:00"), ("2025-07-15", "09:00")])
def test_combine_datetime_invalid(day, clock):
    with pytest.raises(ValueError):
        combine_datetime(day, clock)


def test_format_date_for_display():
    assert format_date_for_display("2025-07-15") == "Tuesday, July 15, 2025"


def test_format_date_passes_through_unparsable():
    assert format_date_for_display("someday") == "someday"


def test_format_time_for_display_morning_and_afternoon():
    morning = format_time_for_display("11:15:00")
    afternoon = format_time_for_display("23:15:00")
    assert morning.endswith("AM")
    assert afternoon.endswith("PM")
    assert morning[:5] == afternoon[:5]


def test_format_time_midnight_uses_twelve():
    assert format_time_for_display("00:00:00").startswith("12:00")


def test_format_time_passes_through_unparsable():
    assert format_time_for_display("later") == "later"


def test_same_day():
    assert is_same_day(_ts(2025, 7, 15, 0, 0, 1), _ts(2025, 7, 15, 23, 59, 59))
    assert not is_same_day(_ts(2025, 7, 15), _ts(2025, 7, 16))


def test_same_week_blocks_of_year():
    assert is_same_week(_ts(2025, 1, 1), _ts(2025, 1, 7))
    assert not is_same_week(_ts(2025, 1, 7), _ts(2025, 1, 8))
    assert not is_same_week(_ts(2024, 1, 1), _ts(2025, 1, 1))


def test_same_month():
    assert is_same_month(_ts(2025, 7, 1), _ts(2025, 7, 31))
    assert not is_same_month(_ts(2025, 7, 31), _ts(2025, 8, 1))
    assert not is_same_month(_ts(2024, 7, 1), _ts(2025, 7, 1))


def test_server_is_running_detects_listener():
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]
    try:
        assert server_is_running("127.0.0.1", port) is True
    finally:
        listener.close()
    assert server_is_running("127.0.0.1", port) is False


def test_date_helpers_agree_with_parsers():
    today = date(2025, 7, 15)
    first = combine_datetime(parse_date_input("today", today=today), parse_time_input("08:00"))
    second = combine_datetime(parse_date_input("tomorrow", today=today), parse_time_input("08:00"))
    assert not is_same_day(first, second)
    assert is_same_month(first, second)
    assert (today + timedelta(days=1)).isoformat() == parse_date_input("tomorrow", today=today)