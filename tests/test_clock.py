"""Test the mission clock helpers."""
from engine.clock import MISSION_DEADLINE, START_TIME, format_time


def test_format_time():
    assert format_time(360) == "06:00"
    assert format_time(375) == "06:15"
    assert format_time(0) == "00:00"
    assert format_time(1439) == "23:59"


def test_format_time_wraps_at_midnight():
    assert format_time(1440) == "00:00"
    assert format_time(1500) == "01:00"


def test_mission_window():
    assert format_time(START_TIME) == "06:00"
    assert MISSION_DEADLINE > START_TIME
