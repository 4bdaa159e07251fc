"""
Service calendar: which service_ids run on a given date.
"""
import datetime
from dataclasses import dataclass
from typing import Iterable, List, Set

from tripfinder.common import iter_feed_rows
from tripfinder.logger import get_logger

logger = get_logger("services")

WEEKDAY_COLUMNS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')

SERVICE_ADDED = 1
SERVICE_REMOVED = 2


@dataclass(frozen=True)
class Calendar:
    service_id: str
    weekdays: tuple[bool, bool, bool, bool, bool, bool, bool]
    start_date: str  # YYYYMMDD
    end_date: str  # YYYYMMDD

    def runs_on(self, day: datetime.date) -> bool:
        search_date = day.strftime('%Y%m%d')
        return self.weekdays[day.weekday()] and self.start_date <= search_date <= self.end_date


@dataclass(frozen=True)
class CalendarDate:
    service_id: str
    date: str  # YYYYMMDD
    exception_type: int


def load_calendars(feed_dir: str) -> List[Calendar]:
    calendars: List[Calendar] = []
    required_columns = ['service_id', *WEEKDAY_COLUMNS, 'start_date', 'end_date']

    for row_num, row in iter_feed_rows(feed_dir, 'calendar.txt', required_columns, required=False):
        calendars.append(Calendar(
            service_id=row['service_id'].strip(),
            weekdays=tuple(row[column].strip() == '1' for column in WEEKDAY_COLUMNS),
            start_date=row['start_date'].strip(),
            end_date=row['end_date'].strip(),
        ))

    return calendars


def load_calendar_dates(feed_dir: str) -> List[CalendarDate]:
    calendar_dates: List[CalendarDate] = []
    required_columns = ['service_id', 'date', 'exception_type']

    for row_num, row in iter_feed_rows(feed_dir, 'calendar_dates.txt', required_columns, required=False):
        try:
            exception_type = int(row['exception_type'])
        except ValueError:
            logger.warning(
                f"Skipping malformed line in calendar_dates.txt line {row_num}: {row}")
            continue
        calendar_dates.append(CalendarDate(
            service_id=row['service_id'].strip(),
            date=row['date'].strip(),
            exception_type=exception_type,
        ))

    return calendar_dates


def get_active_services(calendars: Iterable[Calendar], calendar_dates: Iterable[CalendarDate],
                        date: str) -> Set[str]:
    """
    Get active services for a given date.

    Args:
        calendars: Rows of calendar.txt
        calendar_dates: Rows of calendar_dates.txt
        date (str): Date in 'YYYY-MM-DD' format.

    Returns:
        Set[str]: Service IDs running on that date.

    Raises:
        ValueError: If the date format is incorrect.
    """
    day = datetime.datetime.strptime(date, '%Y-%m-%d').date()
    search_date = day.strftime('%Y%m%d')

    active_services = {calendar.service_id for calendar in calendars if calendar.runs_on(day)}

    for calendar_date in calendar_dates:
        if calendar_date.date != search_date:
            continue
        if calendar_date.exception_type == SERVICE_ADDED:
            active_services.add(calendar_date.service_id)
        elif calendar_date.exception_type == SERVICE_REMOVED:
            active_services.discard(calendar_date.service_id)

    logger.debug(f"Found {len(active_services)} active services for date {date}")
    return active_services
