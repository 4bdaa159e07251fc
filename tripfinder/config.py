"""
Configuration settings for the trip finder.
"""
# stop_sequence value the source feeds use for the first stop of every trip.
# None selects the lowest stop_sequence of each trip instead.
ORIGIN_SEQUENCE = 10

# Directions services accept at most this many intermediate waypoints.
MAX_WAYPOINTS = 25

# Name of the file storing ETag / Last-Modified of the last downloaded feed.
METADATA_FILENAME = '.gtfsmetadata'

REQUIRED_FEED_FILES = ('stops.txt', 'trips.txt', 'stop_times.txt')

# Folder under the output directory keeping the last downloaded feed, reused
# while the server reports it unchanged.
FEED_CACHE_DIRNAME = 'feed'
