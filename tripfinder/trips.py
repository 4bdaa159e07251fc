"""
Functions for handling GTFS trip data.
"""
from dataclasses import dataclass
from typing import Dict, Optional

from tripfinder.common import iter_feed_rows, optional_value
from tripfinder.logger import get_logger

logger = get_logger("trips")


@dataclass(frozen=True)
class Trip:
    """
    A single scheduled vehicle run. Route and service are carried but not
    interpreted by the query layer.
    """
    trip_id: str
    route_id: str
    service_id: str
    headsign: Optional[str] = None
    direction_id: Optional[int] = None


def load_trips(feed_dir: str) -> Dict[str, Trip]:
    """
    Load every trip in 'trips.txt'.

    Returns:
        Dict[str, Trip]: Trips keyed by trip_id.
    """
    trips: Dict[str, Trip] = {}

    for row_num, row in iter_feed_rows(feed_dir, 'trips.txt', ['route_id', 'service_id', 'trip_id']):
        direction = optional_value(row, 'direction_id')
        try:
            trip = Trip(
                trip_id=row['trip_id'].strip(),
                route_id=row['route_id'].strip(),
                service_id=row['service_id'].strip(),
                headsign=optional_value(row, 'trip_headsign'),
                direction_id=int(direction) if direction is not None else None,
            )
        except ValueError as e:
            logger.warning(f"Skipping malformed line {row_num} in trips.txt: {e}")
            continue

        if trip.trip_id in trips:
            logger.warning(f"Duplicate trip_id {trip.trip_id} in trips.txt line {row_num}, keeping the first")
            continue
        trips[trip.trip_id] = trip
        logger.debug(f"Found trip {trip.trip_id} for service {trip.service_id}")

    return trips
