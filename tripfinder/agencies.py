"""
Module for loading GTFS agency data.
"""
from dataclasses import dataclass
from typing import List, Optional

from tripfinder.common import iter_feed_rows, optional_value


@dataclass(frozen=True)
class Agency:
    agency_name: str
    agency_url: Optional[str] = None
    agency_timezone: Optional[str] = None
    agency_id: Optional[str] = None


def load_agencies(feed_dir: str) -> List[Agency]:
    return [
        Agency(
            agency_name=row['agency_name'].strip(),
            agency_url=optional_value(row, 'agency_url'),
            agency_timezone=optional_value(row, 'agency_timezone'),
            agency_id=optional_value(row, 'agency_id'),
        )
        for _, row in iter_feed_rows(feed_dir, 'agency.txt', ['agency_name'], required=False)
    ]
