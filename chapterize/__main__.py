"""
Command-line interface for chapterize
"""
import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import CHAPTER_MIN_INTERVAL
from .formatting import print_header, print_success
from .logging import configure_logging
from .pipeline import process_directory, process_file
from .utils import check_dependencies

def non_negative_int(value: str) -> int:
    """argparse type for a whole number of seconds, 0 or more"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {number}")
    return number

def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser"""
    parser = argparse.ArgumentParser(
        prog="chapterize",
        description="Add evenly spaced chapter markers to video files without re-encoding"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set logging level (default from config)"
    )
    parser.add_argument(
        "--no-log-file",
        dest="file_logging",
        action="store_false",
        help="Log to the console only"
    )
    parser.add_argument(
        "-j", "--jobs",
        type=int,
        default=1,
        help="Number of files processed in parallel (default: %(default)s)"
    )
    parser.add_argument(
        "--min-interval",
        dest="min_interval",
        type=non_negative_int,
        default=CHAPTER_MIN_INTERVAL,
        help="Minimum seconds between chapter marks (default: %(default)s)"
    )
    parser.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        help="Print the chapters that would be written without running ffmpeg"
    )
    parser.add_argument(
        "source",
        type=Path,
        nargs="?",
        help="Source file or directory"
    )
    parser.add_argument(
        "destination",
        type=Path,
        nargs="?",
        help="Destination directory (created if missing)"
    )
    return parser

def main(argv=None) -> int:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.source is None or args.destination is None:
        parser.print_usage()
        return 1

    configure_logging(args.log_level, file_logging=args.file_logging)
    log = logging.getLogger("chapterize")
    print_header(f"chapterize v{__version__}")

    if not check_dependencies():
        log.error("Missing required dependencies")
        return 1

    if not args.source.exists():
        log.error("Input %s does not exist", args.source)
        return 1
    args.destination.mkdir(parents=True, exist_ok=True)

    try:
        if args.source.is_file():
            out_file = args.destination / args.source.name
            if process_file(args.source, out_file, args.min_interval, args.dry_run):
                print_success(f"Chapterized {args.source.name}")
                return 0
            return 1
        if process_directory(args.source, args.destination, max(args.jobs, 1),
                             args.min_interval, args.dry_run):
            log.info("Successfully processed directory %s", args.source)
            return 0
    except KeyboardInterrupt:
        log.warning("Interrupted by user")
        return 130

    log.error("Some files could not be chapterized")
    return 1

if __name__ == "__main__":
    sys.exit(main())
