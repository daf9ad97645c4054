#!/usr/bin/env python3
"""
Command-line interface for the locimages package.
"""

import argparse
import asyncio
import json
import sys

from .adapters.manager import AdapterManager, KNOWN_SOURCES
from .aggregator import LocationSearch, MissingLocationError, parse_sources, parse_coordinates
from .config import load_config, validate_config
from .utils.logger import get_logger, configure_logging

logger = get_logger("locimages.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find images of a location across several image providers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m locimages.cli search --location "Paris"
  python -m locimages.cli search --location "Brooklyn, NY" --sources "zillow,redfin"
  python -m locimages.cli search --location "Lisbon" --sources flickr --lat 38.72 --lng -9.14
  python -m locimages.cli serve --port 8000
        """
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the YAML configuration file (default: $LOCIMAGES_CONFIG or config.yaml)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Run one search and print the JSON response")
    search_parser.add_argument("--location", required=True, help="Address, city or landmark")
    search_parser.add_argument(
        "--sources",
        default=None,
        help=f"Comma-separated sources out of {','.join(KNOWN_SOURCES)} (default: google,bing,flickr,unsplash)"
    )
    search_parser.add_argument("--lat", default=None, help="Latitude, used by flickr")
    search_parser.add_argument("--lng", default=None, help="Longitude, used by flickr")
    search_parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")

    serve_parser = subparsers.add_parser("serve", help="Start the web server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    return parser


def run_search(args, config) -> int:
    location_search = LocationSearch(AdapterManager(config))

    try:
        response = asyncio.run(location_search.search(
            args.location,
            parse_sources(args.sources),
            parse_coordinates(args.lat, args.lng),
        ))
    except MissingLocationError as e:
        logger.error(str(e))
        return 1

    print(json.dumps(response.to_dict(), indent=args.indent, ensure_ascii=False))
    return 0


def main(argv=None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        validate_config(config)
        configure_logging(config.get('logging'))

        if args.command == "search":
            return run_search(args, config)

        if args.command == "serve":
            # Imported here so `search` does not need the web stack loaded
            from .web_ui import run_web_ui
            run_web_ui(host=args.host, port=args.port, reload=args.reload)
            return 0

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1

    return 1


if __name__ == "__main__":
    sys.exit(main())
