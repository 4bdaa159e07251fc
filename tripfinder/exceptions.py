"""
Exceptions raised by the trip finder.
"""


class TripFinderError(Exception):
    """Base class for trip finder errors."""


class TripNotFoundError(TripFinderError, LookupError):
    """A trip id has no stop times in the loaded schedule."""

    def __init__(self, trip_id: str):
        super().__init__(f"Trip {trip_id} has no stop times")
        self.trip_id = trip_id


class FeedDownloadError(TripFinderError):
    """The GTFS feed could not be downloaded."""

    def __init__(self, feed_url: str, status_code: int):
        super().__init__(f"Failed to download GTFS data from {feed_url}: {status_code}")
        self.feed_url = feed_url
        self.status_code = status_code
