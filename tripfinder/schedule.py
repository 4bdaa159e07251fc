"""
The in-memory schedule the query layer works on.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple

from tripfinder.agencies import Agency, load_agencies
from tripfinder.logger import get_logger
from tripfinder.routes import Route, load_routes
from tripfinder.services import Calendar, CalendarDate, load_calendar_dates, load_calendars
from tripfinder.stop_times import StopTime, load_stop_times
from tripfinder.stops import Stop, load_stops
from tripfinder.trips import Trip, load_trips

logger = get_logger("schedule")


@dataclass(frozen=True)
class Schedule:
    """
    A fully loaded feed. It is built once and never mutated afterwards;
    reloading a feed means building a new Schedule.
    """
    stops: Mapping[str, Stop]
    trips: Mapping[str, Trip]
    stop_times: Tuple[StopTime, ...]
    routes: Mapping[str, Route] = field(default_factory=dict)
    agencies: Tuple[Agency, ...] = ()
    calendars: Tuple[Calendar, ...] = ()
    calendar_dates: Tuple[CalendarDate, ...] = ()


def build_schedule(stops: Iterable[Stop], trips: Iterable[Trip], stop_times: Iterable[StopTime],
                   routes: Iterable[Route] = (), agencies: Iterable[Agency] = (),
                   calendars: Iterable[Calendar] = (),
                   calendar_dates: Iterable[CalendarDate] = ()) -> Schedule:
    """Assemble a read-only Schedule from loaded records."""
    stops_by_id: Dict[str, Stop] = {stop.stop_id: stop for stop in stops}
    trips_by_id: Dict[str, Trip] = {trip.trip_id: trip for trip in trips}
    routes_by_id: Dict[str, Route] = {route.route_id: route for route in routes}

    return Schedule(
        stops=MappingProxyType(stops_by_id),
        trips=MappingProxyType(trips_by_id),
        stop_times=tuple(stop_times),
        routes=MappingProxyType(routes_by_id),
        agencies=tuple(agencies),
        calendars=tuple(calendars),
        calendar_dates=tuple(calendar_dates),
    )


def load_schedule(feed_dir: str) -> Schedule:
    """
    Read every file of an unzipped GTFS feed the trip finder uses.

    Raises:
        FileNotFoundError: If stops.txt, trips.txt or stop_times.txt is missing.
        KeyError: If one of them lacks a required column.
    """
    logger.info(f"Reading GTFS data from {feed_dir}")

    schedule = build_schedule(
        stops=load_stops(feed_dir).values(),
        trips=load_trips(feed_dir).values(),
        stop_times=load_stop_times(feed_dir),
        routes=load_routes(feed_dir).values(),
        agencies=load_agencies(feed_dir),
        calendars=load_calendars(feed_dir),
        calendar_dates=load_calendar_dates(feed_dir),
    )

    logger.info(
        f"Loaded {len(schedule.stops)} stops, {len(schedule.trips)} trips, "
        f"{len(schedule.stop_times)} stop_times, {len(schedule.routes)} routes, "
        f"{len(schedule.calendars)} calendar entries, "
        f"{len(schedule.calendar_dates)} calendar date exceptions"
    )
    return schedule
