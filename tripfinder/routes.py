"""
Module for loading GTFS routes data.
"""
from dataclasses import dataclass
from typing import Dict, Optional

from tripfinder.common import iter_feed_rows, optional_value
from tripfinder.logger import get_logger

logger = get_logger("routes")


@dataclass(frozen=True)
class Route:
    route_id: str
    route_type: Optional[int] = None
    agency_id: Optional[str] = None
    route_short_name: Optional[str] = None
    route_long_name: Optional[str] = None
    route_color: str = '000000'


def load_routes(feed_dir: str) -> Dict[str, Route]:
    """
    Load routes data from the GTFS feed. The file is optional for the trip
    finder, so a feed without it yields an empty mapping.
    """
    routes: Dict[str, Route] = {}

    for row_num, row in iter_feed_rows(feed_dir, 'routes.txt', ['route_id'], required=False):
        route_type = optional_value(row, 'route_type')
        try:
            route = Route(
                route_id=row['route_id'].strip(),
                route_type=int(route_type) if route_type is not None else None,
                agency_id=optional_value(row, 'agency_id'),
                route_short_name=optional_value(row, 'route_short_name'),
                route_long_name=optional_value(row, 'route_long_name'),
                route_color=optional_value(row, 'route_color') or '000000',
            )
        except ValueError as e:
            logger.warning(f"Error parsing routes.txt line {row_num}: {e}")
            continue
        routes[route.route_id] = route

    return routes
