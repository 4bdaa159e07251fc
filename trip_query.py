#!/usr/bin/env python3
"""
Query start stops, end stops, departure times and trip waypoints of a GTFS feed.
"""
import argparse
import sys
import traceback

from tripfinder.cli_parser import create_trip_query_parser, origin_sequence_from_args, validate_trip_query_args
from tripfinder.logger import get_logger, set_verbosity
from tripfinder.orchestrators import prepare_feed_directory, run_trip_query

logger = get_logger("trip_query")


def main(argv=None) -> int:
    """Main function for the trip query tool."""
    parser = create_trip_query_parser()
    args = parser.parse_args(argv)
    set_verbosity(args.verbose)

    try:
        validate_trip_query_args(args)
    except argparse.ArgumentError as e:
        parser.error(str(e))

    try:
        feed_dir = prepare_feed_directory(
            args.feed_dir, args.feed_url, args.output_dir, args.force_download
        )

        result = run_trip_query(
            feed_dir=feed_dir,
            output_dir=args.output_dir,
            start_stop=args.start_stop,
            end_stop=args.end_stop,
            trip_id=args.trip,
            date=args.date,
            origin_sequence=origin_sequence_from_args(args),
            output_format=args.format,
            pretty=args.pretty,
        )

        logger.info(f"Query '{result['query']}' completed successfully:")
        logger.info(f"  - {result['count']} results written to {result['output_path']}")
        if result['issues']:
            logger.info(f"  - {result['issues']} data integrity issues reported")
        return 0

    except Exception as e:
        logger.error(f"Trip query failed: {e}")
        logger.debug(traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())
