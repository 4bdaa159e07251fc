"""
Command-line argument parsing for the trip query tool.
"""
import argparse
import datetime
import os

from tripfinder import config


class CommonArgumentParser:
    """Argument groups shared by the trip finder commands."""

    @staticmethod
    def add_feed_source_args(parser: argparse.ArgumentParser, required: bool = True):
        """Add mutually exclusive feed source arguments (--feed-dir or --feed-url)."""
        source_group = parser.add_mutually_exclusive_group(required=required)
        source_group.add_argument('--feed-dir', type=str,
                                  help="Path to the existing feed directory (unzipped)")
        source_group.add_argument('--feed-url', type=str,
                                  help="URL to download the zipped GTFS feed from")
        return source_group

    @staticmethod
    def add_output_args(parser: argparse.ArgumentParser):
        """Add common output-related arguments."""
        parser.add_argument('--output-dir', type=str, default="./output/",
                            help='Directory to write results to (default: ./output/)')
        parser.add_argument('--format', choices=['json', 'html'], default='json',
                            help='Output format (default: json)')
        parser.add_argument('--force-download', action='store_true',
                            help="Force download even if the feed hasn't been modified")
        parser.add_argument('--pretty', action='store_true',
                            help="Pretty-print JSON output")
        parser.add_argument('-v', '--verbose', action='store_true',
                            help="Log debug messages")

    @staticmethod
    def add_origin_args(parser: argparse.ArgumentParser):
        """Add the arguments choosing which stop_sequence marks a trip's first stop."""
        origin_group = parser.add_mutually_exclusive_group()
        origin_group.add_argument('--origin-sequence', type=int, default=config.ORIGIN_SEQUENCE,
                                  help=f"stop_sequence of the first stop of every trip "
                                       f"(default: {config.ORIGIN_SEQUENCE})")
        origin_group.add_argument('--origin-min', action='store_true',
                                  help="Use the lowest stop_sequence of each trip as its first stop")

    @staticmethod
    def validate_common_args(args):
        """Validate common argument combinations."""
        if getattr(args, 'feed_dir', None) and not os.path.isdir(args.feed_dir):
            raise argparse.ArgumentError(None, f"Feed directory does not exist: {args.feed_dir}")


def create_trip_query_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Query start stops, end stops and departure times of a GTFS feed.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Queries:
  (no stop)                           List the stops where trips start
  --start-stop S                      List the stops where trips from S end
  --start-stop S --end-stop E         List departures of trips from S to E
  --trip T                            List the stop coordinates of trip T

Examples:
  python trip_query.py --feed-dir ./feed
  python trip_query.py --feed-dir ./feed --start-stop 1001 --end-stop 1042 --date 2025-07-24
  python trip_query.py --feed-url http://example.com/gtfs.zip --start-stop 1001 --format html
        """)

    CommonArgumentParser.add_feed_source_args(parser)
    CommonArgumentParser.add_output_args(parser)
    CommonArgumentParser.add_origin_args(parser)

    parser.add_argument('--start-stop', type=str,
                        help="stop_id where the trip starts")
    parser.add_argument('--end-stop', type=str,
                        help="stop_id where the trip ends (requires --start-stop)")
    parser.add_argument('--date', type=str,
                        help="Only list departures of services running on this date (YYYY-MM-DD)")
    parser.add_argument('--trip', type=str,
                        help="trip_id whose stop coordinates should be listed")

    return parser


def validate_trip_query_args(args):
    """Validate arguments for the trip query tool."""
    CommonArgumentParser.validate_common_args(args)

    if args.end_stop and not args.start_stop:
        raise argparse.ArgumentError(None, "--end-stop requires --start-stop")
    if args.trip and (args.start_stop or args.end_stop):
        raise argparse.ArgumentError(None, "--trip cannot be combined with --start-stop or --end-stop")
    if args.date:
        if not args.end_stop:
            raise argparse.ArgumentError(None, "--date only applies to departures (--start-stop and --end-stop)")
        try:
            datetime.datetime.strptime(args.date, '%Y-%m-%d')
        except ValueError:
            raise argparse.ArgumentError(None, f"Invalid date, expected YYYY-MM-DD: {args.date}")


def origin_sequence_from_args(args):
    """None selects the lowest stop_sequence of each trip."""
    return None if args.origin_min else args.origin_sequence
