"""
Prepares query results for the select lists and JSON output.
"""
from typing import Any, Dict, List, Optional

from tripfinder.stops import Stop
from tripfinder.trip_matcher import Departure
from tripfinder.utils import normalize_gtfs_time
from tripfinder.waypoints import Waypoint, Waypoints


def stop_options(stops: List[Stop]) -> List[Dict[str, str]]:
    """Select options for stops: the value is the stop id, the label its name."""
    return [{"value": stop.stop_id, "label": stop.label} for stop in stops]


def departure_options(departures: List[Departure]) -> List[Dict[str, Any]]:
    """Select options for departures: the value is the trip id, the label the time."""
    options = []
    for departure in departures:
        clock_time, next_day = normalize_gtfs_time(departure.departure_time)
        options.append({
            "value": departure.trip_id,
            "label": f"{clock_time} (+1)" if next_day else clock_time,
            "departure_time": departure.departure_time,
            "next_day": next_day,
        })
    return options


def stop_rows(stops: List[Stop]) -> List[Dict[str, Any]]:
    return [
        {
            "stop_id": stop.stop_id,
            "stop_name": stop.stop_name,
            "stop_code": stop.stop_code,
            "lat": stop.stop_lat,
            "lon": stop.stop_lon,
        }
        for stop in stops
    ]


def departure_rows(departures: List[Departure]) -> List[Dict[str, Any]]:
    return [
        {
            "trip_id": departure.trip_id,
            "departure_time": departure.departure_time,
            "departure_seconds": departure.departure_seconds,
        }
        for departure in departures
    ]


def _point(waypoint: Waypoint) -> Dict[str, Any]:
    return {"stop_id": waypoint.stop_id, "lat": waypoint.lat, "lon": waypoint.lon}


def waypoints_data(trip_id: str, waypoints: Optional[Waypoints]) -> Dict[str, Any]:
    if waypoints is None:
        return {"trip_id": trip_id, "origin": None, "destination": None, "waypoints": [], "truncated": False}
    return {
        "trip_id": trip_id,
        "origin": _point(waypoints.origin),
        "destination": _point(waypoints.destination),
        "waypoints": [_point(point) for point in waypoints.intermediates],
        "truncated": waypoints.truncated,
    }
