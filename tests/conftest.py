import pytest

from tripfinder.schedule import build_schedule
from tripfinder.stop_times import StopTime
from tripfinder.stops import Stop
from tripfinder.trips import Trip


def st(trip_id, stop_id, stop_sequence, departure_time=None, arrival_time=None):
    """Shorthand for a StopTime; arrival defaults to the departure."""
    return StopTime(
        trip_id=trip_id,
        stop_id=stop_id,
        stop_sequence=stop_sequence,
        arrival_time=arrival_time if arrival_time is not None else departure_time,
        departure_time=departure_time,
    )


def make_schedule(stop_times, stop_ids=None, trip_services=None, **extra):
    """
    Build a Schedule whose stops and trips are derived from the stop times
    unless given explicitly.
    """
    if stop_ids is None:
        stop_ids = sorted({stop_time.stop_id for stop_time in stop_times})
    if trip_services is None:
        trip_services = {stop_time.trip_id: "WEEKDAY" for stop_time in stop_times}

    stops = [Stop(stop_id=stop_id, stop_name=f"Stop {stop_id}", stop_lat=42.0, stop_lon=18.0)
             for stop_id in stop_ids]
    trips = [Trip(trip_id=trip_id, route_id="R1", service_id=service_id)
             for trip_id, service_id in trip_services.items()]
    return build_schedule(stops=stops, trips=trips, stop_times=stop_times, **extra)


def write_file(path, content):
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)


@pytest.fixture
def scenario_schedule():
    """T1 and T2 run A -> C, T3 loops A -> B -> A."""
    return make_schedule([
        st("T1", "A", 10, "08:00:00"),
        st("T1", "B", 20, "08:15:00"),
        st("T1", "C", 30, "08:30:00"),
        st("T2", "A", 10, "08:10:00"),
        st("T2", "C", 20, "08:25:00"),
        st("T3", "A", 10, "09:00:00"),
        st("T3", "B", 20, "09:10:00"),
        st("T3", "A", 30, "09:20:00"),
    ])


@pytest.fixture
def feed_dir(tmp_path):
    """A small unzipped GTFS feed on disk."""
    feed = tmp_path / "feed"
    feed.mkdir()

    write_file(feed / 'agency.txt', (
        "agency_id,agency_name,agency_url,agency_timezone\n"
        "LIB,Libertas,https://example.com,Europe/Zagreb\n"
    ))
    write_file(feed / 'stops.txt', (
        "stop_id,stop_code,stop_name,stop_lat,stop_lon\n"
        "A,1,Pile,42.6413,18.1064\n"
        "B,2,Ploce,42.6420,18.1150\n"
        "C,3,Gruz,42.6603,18.0856\n"
        "D,4,Lapad,,\n"
    ))
    write_file(feed / 'routes.txt', (
        "route_id,agency_id,route_short_name,route_long_name,route_type,route_color\n"
        "R1,LIB,1A,Pile - Gruz,3,1E90FF\n"
    ))
    write_file(feed / 'trips.txt', (
        "route_id,service_id,trip_id,trip_headsign,direction_id\n"
        "R1,WEEKDAY,T1,Gruz,0\n"
        "R1,WEEKDAY,T2,Gruz,0\n"
        "R1,SUNDAY,T3,Pile,1\n"
        "R1,WEEKDAY,T4,Lapad,0\n"
    ))
    write_file(feed / 'stop_times.txt', (
        "trip_id,arrival_time,departure_time,stop_id,stop_sequence\n"
        "T1,08:00:00,08:00:00,A,10\n"
        "T1,08:15:00,08:15:00,B,20\n"
        "T1,08:30:00,08:30:00,C,30\n"
        "T2,08:10:00,08:10:00,A,10\n"
        "T2,08:25:00,08:25:00,C,20\n"
        "T3,09:00:00,09:00:00,A,10\n"
        "T3,09:10:00,09:10:00,B,20\n"
        "T3,09:20:00,09:20:00,A,30\n"
        "T4,10:00:00,10:00:00,B,10\n"
        "T4,10:20:00,10:20:00,D,20\n"
    ))
    write_file(feed / 'calendar.txt', (
        "service_id,monday,tuesday,wednesday,thursday,friday,saturday,sunday,start_date,end_date\n"
        "WEEKDAY,1,1,1,1,1,0,0,20250601,20250630\n"
        "SUNDAY,0,0,0,0,0,0,1,20250601,20250630\n"
    ))
    write_file(feed / 'calendar_dates.txt', (
        "service_id,date,exception_type\n"
        "WEEKDAY,20250624,2\n"
    ))
    return feed
