import pytest

from tripfinder.services import Calendar, CalendarDate, get_active_services, load_calendar_dates, load_calendars


def test_get_active_services_basic(feed_dir):
    calendars = load_calendars(str(feed_dir))
    calendar_dates = load_calendar_dates(str(feed_dir))

    # 2025-06-23 is a Monday
    assert get_active_services(calendars, calendar_dates, "2025-06-23") == {"WEEKDAY"}
    # WEEKDAY is removed on 2025-06-24
    assert get_active_services(calendars, calendar_dates, "2025-06-24") == set()
    assert get_active_services(calendars, calendar_dates, "2025-06-22") == {"SUNDAY"}


def test_get_active_services_outside_range():
    calendars = [Calendar("S1", (True,) * 7, "20250601", "20250630")]

    assert get_active_services(calendars, [], "2025-06-30") == {"S1"}
    assert get_active_services(calendars, [], "2025-07-01") == set()


def test_get_active_services_added_by_exception():
    calendar_dates = [CalendarDate("EXTRA", "20250704", 1), CalendarDate("OTHER", "20250705", 1)]

    assert get_active_services([], calendar_dates, "2025-07-04") == {"EXTRA"}


def test_get_active_services_invalid_date():
    with pytest.raises(ValueError):
        get_active_services([], [], "04/07/2025")
