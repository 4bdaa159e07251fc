"""
Functions for handling GTFS stop_times data.
"""
from dataclasses import dataclass
from typing import List, Optional

from tripfinder.common import iter_feed_rows, optional_value
from tripfinder.logger import get_logger
from tripfinder.utils import parse_gtfs_time

logger = get_logger("stop_times")


@dataclass(frozen=True)
class StopTime:
    """
    One stop visited by one trip. Times keep the feed's HH:MM:SS text and may
    be None when the feed leaves them blank.
    """
    trip_id: str
    stop_id: str
    stop_sequence: int
    arrival_time: Optional[str] = None
    departure_time: Optional[str] = None

    @property
    def departure_seconds(self) -> Optional[int]:
        return parse_gtfs_time(self.departure_time)


def load_stop_times(feed_dir: str) -> List[StopTime]:
    """
    Load 'stop_times.txt' in file order.

    Rows with a non-integer or negative stop_sequence are skipped. Malformed
    times are kept as given; they are only rejected where a time is needed.
    """
    stop_times: List[StopTime] = []
    required_columns = ['trip_id', 'arrival_time', 'departure_time', 'stop_id', 'stop_sequence']

    for row_num, row in iter_feed_rows(feed_dir, 'stop_times.txt', required_columns):
        trip_id = row['trip_id'].strip()
        try:
            stop_sequence = int(row['stop_sequence'])
        except ValueError as e:
            logger.warning(f"Error parsing stop_sequence for trip {trip_id} on line {row_num}: {e}")
            continue
        if stop_sequence < 0:
            logger.warning(f"Negative stop_sequence for trip {trip_id} on line {row_num}, skipping")
            continue

        stop_time = StopTime(
            trip_id=trip_id,
            stop_id=row['stop_id'].strip(),
            stop_sequence=stop_sequence,
            arrival_time=optional_value(row, 'arrival_time'),
            departure_time=optional_value(row, 'departure_time'),
        )
        if stop_time.departure_time and stop_time.departure_seconds is None:
            logger.debug(f"Malformed departure_time {stop_time.departure_time!r} for trip {trip_id} on line {row_num}")
        stop_times.append(stop_time)

    return stop_times
