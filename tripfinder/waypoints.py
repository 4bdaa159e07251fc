"""
Stop coordinates of a trip, in the shape a directions service expects.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from tripfinder import config
from tripfinder.diagnostics import MISSING_COORDINATES, UNKNOWN_STOP
from tripfinder.logger import get_logger
from tripfinder.schedule_index import ScheduleIndex

logger = get_logger("waypoints")


@dataclass(frozen=True)
class Waypoint:
    stop_id: str
    lat: float
    lon: float


@dataclass(frozen=True)
class Waypoints:
    origin: Waypoint
    destination: Waypoint
    intermediates: Tuple[Waypoint, ...]
    truncated: bool = False


def trip_waypoints(index: ScheduleIndex, trip_id: str,
                   max_intermediate: int = config.MAX_WAYPOINTS) -> Optional[Waypoints]:
    """
    Resolve the coordinates of every stop of a trip in visiting order.

    Stops that are unknown or lack coordinates are left out. Only the first
    ``max_intermediate`` stops between origin and destination are kept.

    Returns:
        Waypoints, or None if the trip is unknown or fewer than two of its
        stops can be placed on a map.
    """
    points: List[Waypoint] = []
    for stop_time in index.sequence_for(trip_id):
        stop = index.schedule.stops.get(stop_time.stop_id)
        if stop is None:
            index.diagnostics.report(
                UNKNOWN_STOP,
                f"Stop time for trip {trip_id} references non-existent stop {stop_time.stop_id}",
                trip_id=trip_id,
                stop_id=stop_time.stop_id,
            )
            continue
        if not stop.has_coordinates:
            index.diagnostics.report(
                MISSING_COORDINATES,
                f"Stop {stop.stop_id} has no coordinates",
                stop_id=stop.stop_id,
            )
            continue
        points.append(Waypoint(stop_id=stop.stop_id, lat=stop.stop_lat, lon=stop.stop_lon))

    if len(points) < 2:
        logger.debug(f"Trip {trip_id} has fewer than two stops with coordinates")
        return None

    intermediates = points[1:-1]
    truncated = len(intermediates) > max_intermediate
    if truncated:
        logger.info(
            f"Trip {trip_id} has {len(intermediates)} intermediate stops, "
            f"keeping the first {max_intermediate}"
        )

    return Waypoints(
        origin=points[0],
        destination=points[-1],
        intermediates=tuple(intermediates[:max_intermediate]),
        truncated=truncated,
    )
