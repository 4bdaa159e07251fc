import pytest

from tripfinder.utils import normalize_gtfs_time, parse_gtfs_time, seconds_to_time


@pytest.mark.parametrize(
    "time_str,expected",
    [
        ("08:00:00", 8 * 3600),
        ("8:05:30", 8 * 3600 + 5 * 60 + 30),
        (" 23:59:59 ", 86399),
        ("25:10:00", 25 * 3600 + 600),
        ("", None),
        (None, None),
        ("08:00", None),
        ("aa:bb:cc", None),
        ("08:61:00", None),
    ]
)
def test_parse_gtfs_time(time_str, expected):
    assert parse_gtfs_time(time_str) == expected


@pytest.mark.parametrize(
    "time_str,expected",
    [
        ("23:50:00", ("23:50:00", False)),
        ("24:10:00", ("00:10:00", True)),
        ("26:05:09", ("02:05:09", True)),
        ("garbage", ("garbage", False)),
    ]
)
def test_normalize_gtfs_time(time_str, expected):
    assert normalize_gtfs_time(time_str) == expected


def test_seconds_to_time():
    assert seconds_to_time(0) == "00:00:00"
    assert seconds_to_time(8 * 3600 + 61) == "08:01:01"
