import pytest

from conftest import write_file
from tripfinder.schedule import load_schedule
from tripfinder.stop_times import load_stop_times
from tripfinder.stops import load_stops


def test_load_schedule(feed_dir):
    schedule = load_schedule(str(feed_dir))

    assert set(schedule.stops) == {"A", "B", "C", "D"}
    assert set(schedule.trips) == {"T1", "T2", "T3", "T4"}
    assert len(schedule.stop_times) == 10
    assert schedule.routes["R1"].route_color == "1E90FF"
    assert schedule.agencies[0].agency_name == "Libertas"
    assert {calendar.service_id for calendar in schedule.calendars} == {"WEEKDAY", "SUNDAY"}
    assert schedule.calendar_dates[0].exception_type == 2


def test_schedule_is_read_only(feed_dir):
    schedule = load_schedule(str(feed_dir))

    with pytest.raises(TypeError):
        schedule.stops["Z"] = schedule.stops["A"]


def test_stop_fields(feed_dir):
    stops = load_stops(str(feed_dir))

    assert stops["A"].stop_name == "Pile"
    assert stops["A"].stop_code == "1"
    assert stops["A"].stop_lat == pytest.approx(42.6413)
    assert stops["D"].stop_lat is None
    assert not stops["D"].has_coordinates
    assert stops["D"].label == "Lapad"


def test_missing_required_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_schedule(str(tmp_path))


def test_missing_required_column(tmp_path):
    write_file(tmp_path / 'stop_times.txt', "trip_id,stop_id,stop_sequence\nT1,A,10\n")

    with pytest.raises(KeyError, match="arrival_time"):
        load_stop_times(str(tmp_path))


def test_malformed_rows_are_skipped(tmp_path):
    write_file(tmp_path / 'stop_times.txt', (
        "trip_id,arrival_time,departure_time,stop_id,stop_sequence\n"
        "T1,08:00:00,08:00:00,A,10\n"
        "T1,08:10:00,08:10:00,B,twenty\n"
        "T1,08:20:00,08:20:00,C,-1\n"
        "T1,,,D,30\n"
    ))
    stop_times = load_stop_times(str(tmp_path))

    assert [stop_time.stop_id for stop_time in stop_times] == ["A", "D"]
    assert stop_times[1].departure_time is None


def test_bom_and_optional_files(tmp_path):
    with open(tmp_path / 'stops.txt', 'w', encoding='utf-8-sig') as f:
        f.write("stop_id,stop_name,stop_lat,stop_lon\nA,Pile,42.6,18.1\nB,Ploce,not-a-number,18.1\n")
    write_file(tmp_path / 'trips.txt', "route_id,service_id,trip_id\nR1,S1,T1\n")
    write_file(tmp_path / 'stop_times.txt', (
        "trip_id,arrival_time,departure_time,stop_id,stop_sequence\n"
        "T1,08:00:00,08:00:00,A,10\n"
    ))
    schedule = load_schedule(str(tmp_path))

    # B has an unparsable latitude and is dropped
    assert list(schedule.stops) == ["A"]
    assert schedule.trips["T1"].direction_id is None
    assert schedule.routes == {}
    assert schedule.calendars == ()
