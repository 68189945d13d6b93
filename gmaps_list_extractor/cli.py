"""
Command Line Interface

Entry point for extracting a shared list from the command line.

Usage:
    gmaps-list-extract "https://maps.app.goo.gl/abc123"
    gmaps-list-extract "https://maps.app.goo.gl/abc123" --kml trips/tokyo.kml --json tokyo.json
    gmaps-list-extract "https://maps.app.goo.gl/abc123" --no-enrich --no-browser
"""

import argparse
import logging
import sys

from .config import MAX_SCROLL_TICKS, NAVIGATION_TIMEOUT
from .config_manager import ExtractorConfig
from .exceptions import ConfigurationError, ExtractionCancelled, ListExtractorError
from .extractor import ListExtractor


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gmaps-list-extract",
        description="Google Maps Saved List Extractor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gmaps-list-extract "https://maps.app.goo.gl/abc123"
  gmaps-list-extract "https://maps.app.goo.gl/abc123" --kml tokyo.kml --no-csv
  gmaps-list-extract "https://maps.app.goo.gl/abc123" --no-enrich --json tokyo.json
  gmaps-list-extract "https://maps.app.goo.gl/abc123" --headed --require-complete
        """
    )

    parser.add_argument(
        "url",
        help="Shared list URL (e.g., 'https://maps.app.goo.gl/...')"
    )

    parser.add_argument(
        "--kml",
        help="Output KML file path, saved with a .kml extension (default: <list name>.kml in the current directory)"
    )
    csv_group = parser.add_mutually_exclusive_group()
    csv_group.add_argument(
        "--csv",
        dest="csv",
        action="store_true",
        default=True,
        help="Write a CSV file next to the KML file (default)"
    )
    csv_group.add_argument(
        "--no-csv",
        dest="csv",
        action="store_false",
        help="Disable CSV output"
    )
    parser.add_argument(
        "--json",
        help="Also dump the full result to this JSON file"
    )
    parser.add_argument(
        "--no-enrich",
        action="store_true",
        help="Skip the Places API lookups"
    )
    parser.add_argument(
        "--api-key",
        help="Google Places API key (default: GOOGLE_PLACES_API_KEY env var)"
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Download the page without a browser (no scrolling, embedded entries only)"
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window"
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=MAX_SCROLL_TICKS,
        help=f"Maximum scroll ticks while loading the list (default: {MAX_SCROLL_TICKS})"
    )
    parser.add_argument(
        "--require-complete",
        action="store_true",
        help="Fail instead of continuing when the list never finishes loading"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=NAVIGATION_TIMEOUT,
        help=f"Page navigation timeout in seconds (default: {NAVIGATION_TIMEOUT:.0f})"
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging"
    )
    verbosity.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only warnings and errors"
    )
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main(argv=None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        config = ExtractorConfig(
            api_key=args.api_key,
            navigation_timeout=args.timeout,
            max_scroll_ticks=args.max_ticks,
            fail_on_incomplete=args.require_complete,
            headless=not args.headed,
            use_browser=not args.no_browser,
        )
        enrich = not args.no_enrich
        if enrich:
            config.require_api_key()

        with ListExtractor(config=config) as extractor:
            result = extractor.extract(args.url, enrich=enrich)
            written = extractor.save(result, kml_path=args.kml, csv=args.csv, json_path=args.json)

        if not args.quiet:
            print(f"\nDone! Extracted {len(result)} places from '{result.metadata.name}'.")
            for kind, path in written.items():
                if path is not None:
                    print(f"  {kind.upper()} output: {path}")

        return 0

    except ConfigurationError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 2
    except ListExtractorError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1
    except (ExtractionCancelled, KeyboardInterrupt):
        print("\n\nInterrupted by user.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
