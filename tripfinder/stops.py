from dataclasses import dataclass
from typing import Dict, Optional

from tripfinder.common import iter_feed_rows, optional_value
from tripfinder.logger import get_logger

logger = get_logger("stops")


@dataclass(frozen=True)
class Stop:
    stop_id: str
    stop_name: Optional[str] = None
    stop_code: Optional[str] = None
    stop_lat: Optional[float] = None
    stop_lon: Optional[float] = None

    @property
    def label(self) -> str:
        """Name shown in select lists, falling back to the id."""
        return self.stop_name or self.stop_id

    @property
    def has_coordinates(self) -> bool:
        return self.stop_lat is not None and self.stop_lon is not None


def _parse_coordinate(value: Optional[str]) -> Optional[float]:
    return float(value) if value else None


def load_stops(feed_dir: str) -> Dict[str, Stop]:
    stops: Dict[str, Stop] = {}

    for row_num, row in iter_feed_rows(feed_dir, 'stops.txt', ['stop_id']):
        try:
            stop = Stop(
                stop_id=row['stop_id'].strip(),
                stop_name=optional_value(row, 'stop_name'),
                stop_code=optional_value(row, 'stop_code'),
                stop_lat=_parse_coordinate(optional_value(row, 'stop_lat')),
                stop_lon=_parse_coordinate(optional_value(row, 'stop_lon')),
            )
        except ValueError as e:
            logger.warning(f"Error parsing stops.txt line {row_num}: {e} - line data: {row}")
            continue

        if stop.stop_id in stops:
            logger.warning(f"Duplicate stop_id {stop.stop_id} in stops.txt line {row_num}, keeping the first")
            continue
        stops[stop.stop_id] = stop

    logger.debug(f"Loaded {len(stops)} stops from {feed_dir}")
    return stops
