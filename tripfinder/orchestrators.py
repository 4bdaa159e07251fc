"""
Query orchestrators.
This module runs one trip finder query end to end (load, query, write),
separated from CLI parsing and main script concerns.
"""
import os
import re
from typing import Any, Dict, List, Optional

from tripfinder import config
from tripfinder.download import download_feed_from_url
from tripfinder.finder import TripFinder
from tripfinder.logger import get_logger
from tripfinder.report_data import (
    departure_options,
    departure_rows,
    stop_options,
    stop_rows,
    waypoints_data,
)
from tripfinder.report_writer import render_and_write_html, write_result_json
from tripfinder.schedule import load_schedule

logger = get_logger("orchestrators")

SELECT_TEMPLATE = "select_list.html.j2"


def prepare_feed_directory(feed_dir: Optional[str], feed_url: Optional[str],
                           output_dir: str, force_download: bool = False) -> str:
    """
    Prepare the feed directory by downloading if necessary.

    A downloaded feed is kept under ``output_dir`` and reused by later
    queries while the server reports it unchanged.

    Returns:
        Path to the feed directory
    """
    if feed_url:
        logger.info(f"Fetching GTFS feed from {feed_url}...")
        feed_dir = download_feed_from_url(feed_url, output_dir, force_download)

    return feed_dir


def safe_filename(value: str) -> str:
    """Make an id usable as part of a file name."""
    return re.sub(r'[^A-Za-z0-9_.-]', '_', value)


def _write(output_dir: str, basename: str, output_format: str, pretty: bool,
           json_data: Any, html_data: Dict[str, Any]) -> str:
    if output_format == 'html':
        output_path = os.path.join(output_dir, f"{basename}.html")
        render_and_write_html(SELECT_TEMPLATE, html_data, output_path)
        logger.info(f"Select list written to: {output_path}")
        return output_path
    return write_result_json(output_dir, f"{basename}.json", json_data, pretty)


def _issue_messages(finder: TripFinder) -> List[str]:
    return [issue.message for issue in finder.diagnostics.issues]


def run_trip_query(feed_dir: str, output_dir: str, start_stop: Optional[str] = None,
                   end_stop: Optional[str] = None, trip_id: Optional[str] = None,
                   date: Optional[str] = None,
                   origin_sequence: Optional[int] = config.ORIGIN_SEQUENCE,
                   output_format: str = 'json', pretty: bool = False) -> Dict[str, Any]:
    """
    Load the feed, run the query selected by the given ids and write the result.

    The query follows the selection flow of the trip finder:
    no stop -> start stops, start stop -> end stops,
    start and end stop -> departures, trip -> waypoints.

    Returns:
        Dictionary with the query name, result count, output path and the
        number of data integrity issues found.
    """
    schedule = load_schedule(feed_dir)
    finder = TripFinder(schedule, origin_sequence=origin_sequence)

    if trip_id:
        query = 'waypoints'
        waypoints = finder.trip_waypoints(trip_id)
        data = waypoints_data(trip_id, waypoints)
        count = 0 if waypoints is None else len(waypoints.intermediates) + 2
        # waypoints feed a map, there is no select list to render
        output_path = write_result_json(output_dir, f"waypoints_{safe_filename(trip_id)}.json", data, pretty)

    elif start_stop and end_stop:
        query = 'departures'
        departures = finder.match_trips(start_stop, end_stop, date=date)
        count = len(departures)
        basename = f"departures_{safe_filename(start_stop)}_{safe_filename(end_stop)}"
        if date:
            basename += f"_{date}"
        output_path = _write(
            output_dir, basename, output_format, pretty,
            json_data={
                "start_stop": start_stop,
                "end_stop": end_stop,
                "date": date,
                "departures": departure_rows(departures),
            },
            html_data={
                "title": "Departure times",
                "subtitle": f"{start_stop} → {end_stop}" + (f" on {date}" if date else ""),
                "select_id": "departure-time",
                "placeholder": "Select a departure time",
                "options": departure_options(departures),
                "issues": _issue_messages(finder),
            },
        )

    elif start_stop:
        query = 'end_stops'
        stops = finder.list_end_stops(start_stop)
        count = len(stops)
        output_path = _write(
            output_dir, f"end_stops_{safe_filename(start_stop)}", output_format, pretty,
            json_data={"start_stop": start_stop, "stops": stop_rows(stops)},
            html_data={
                "title": "End stops",
                "subtitle": f"Trips starting at {start_stop}",
                "select_id": "end",
                "placeholder": "Select an end stop",
                "options": stop_options(stops),
                "issues": _issue_messages(finder),
            },
        )

    else:
        query = 'start_stops'
        stops = finder.list_start_stops()
        count = len(stops)
        output_path = _write(
            output_dir, "start_stops", output_format, pretty,
            json_data={"stops": stop_rows(stops)},
            html_data={
                "title": "Start stops",
                "subtitle": None,
                "select_id": "start",
                "placeholder": "Select a start stop",
                "options": stop_options(stops),
                "issues": _issue_messages(finder),
            },
        )

    if finder.diagnostics.issues:
        logger.warning(f"Found {len(finder.diagnostics)} data integrity issues in the feed")

    return {
        'query': query,
        'count': count,
        'output_path': output_path,
        'issues': len(finder.diagnostics),
    }
