"""Command-line interface for finding nearby bike-share stations."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

import aiohttp

from nearby_bikes.adapters.config import AppConfig
from nearby_bikes.adapters.geolocation import StaticGeolocationProvider
from nearby_bikes.adapters.presenters import (
    RefreshStatePresenter,
    StationPriorityPresenter,
    format_clock_time,
    format_distance,
)
from nearby_bikes.adapters.scheduling import AutoRefreshScheduler
from nearby_bikes.application.nearby_stations_tracker import NearbyStationsTracker
from nearby_bikes.application.priority_scorer import find_optimal_station, prioritize_stations
from nearby_bikes.domain.errors import BikeFinderError
from nearby_bikes.domain.models.coordinates import Coordinates
from nearby_bikes.domain.models.nearby_stations_result import StationSearchResult
from nearby_bikes.domain.models.priority_config import PRIORITY_PRESETS
from nearby_bikes.domain.models.search_options import SortKey
from nearby_bikes.main import (
    configure_logging,
    create_locator,
    create_search_service,
    create_tracker,
    load_config,
)

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nearby-bikes",
        description="Find bike-share stations with free bikes near a position",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Stations within 200m of the Louvre
  nearby-bikes search --lat 48.8606 --lon 2.3376

  # Rank by recommendation, wider radius, JSON output
  nearby-bikes search --lat 48.8606 --lon 2.3376 --max-distance 500 --sort-by priority --json

  # Closest bike-share networks
  nearby-bikes networks --lat 48.8606 --lon 2.3376 --count 3

  # Keep the list up to date
  nearby-bikes watch --lat 48.8606 --lon 2.3376
        """,
    )
    parser.add_argument("--log-level", help="Override the configured log level")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    def add_position(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--lat", type=float, required=True, help="Latitude in degrees")
        sub.add_argument("--lon", type=float, required=True, help="Longitude in degrees")

    def add_search_options(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--max-distance", type=float, help="Search radius in meters")
        sub.add_argument("--max-stations", type=int, help="Maximum number of stations")
        sub.add_argument(
            "--sort-by", choices=[key.value for key in SortKey], help="Sort key for the results"
        )
        sub.add_argument(
            "--preset", choices=sorted(PRIORITY_PRESETS), help="Priority threshold preset"
        )
        sub.add_argument(
            "--include-empty", action="store_true", help="Keep stations without free bikes"
        )

    search_parser = subparsers.add_parser("search", help="Search stations near a position")
    add_position(search_parser)
    add_search_options(search_parser)
    search_parser.add_argument("--json", action="store_true", help="Output as JSON")

    networks_parser = subparsers.add_parser("networks", help="List the closest networks")
    add_position(networks_parser)
    networks_parser.add_argument("--count", type=int, default=5, help="Number of networks")
    networks_parser.add_argument("--json", action="store_true", help="Output as JSON")

    watch_parser = subparsers.add_parser("watch", help="Search and keep refreshing")
    add_position(watch_parser)
    add_search_options(watch_parser)

    return parser


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> None:
    """Copy command-line options onto the config; assignments are validated."""
    if getattr(args, "max_distance", None) is not None:
        config.max_distance = args.max_distance
    if getattr(args, "max_stations", None) is not None:
        config.max_stations = args.max_stations
    if getattr(args, "sort_by", None):
        config.sort_by = args.sort_by
    if getattr(args, "preset", None):
        config.priority_preset = args.preset
    if getattr(args, "include_empty", False):
        config.require_bikes = False
    if args.log_level:
        config.log_level = args.log_level


def _result_to_dict(result: StationSearchResult, config: AppConfig) -> dict[str, Any]:
    priorities = prioritize_stations(result.stations, config.priority_config())
    return {
        "network_id": result.network_id,
        "network_name": result.network_name,
        "user_location": {
            "latitude": result.user_location.latitude,
            "longitude": result.user_location.longitude,
        },
        "timestamp": result.timestamp,
        "total_stations": result.total_stations,
        "filtered_stations": result.filtered_stations,
        "search_duration_ms": result.search_duration_ms,
        "stations": [
            {
                "id": item.station.id,
                "name": item.station.name,
                "latitude": item.station.latitude,
                "longitude": item.station.longitude,
                "distance": item.station.distance,
                "free_bikes": item.station.free_bikes,
                "empty_slots": item.station.empty_slots,
                "timestamp": item.station.timestamp,
                "priority": item.priority.level.value,
                "bike_availability": item.priority.bike_availability.value,
                "recommendation_score": item.priority.recommendation_score,
            }
            for item in priorities
        ],
    }


def _print_result(result: StationSearchResult, config: AppConfig) -> None:
    print(f"\n{result.network_name} ({result.network_id})")
    print(
        f"{result.filtered_stations} of {result.total_stations} station(s) "
        f"within {format_distance(config.max_distance)}"
    )
    print("=" * 70)

    if not result.stations:
        print("  No stations with bikes nearby. Try a larger radius.")
        return

    for item in prioritize_stations(result.stations, config.priority_config()):
        view = StationPriorityPresenter(item).to_view_model()
        badge = f"  [{view.badge_text}]" if view.badge_text else ""
        slots = "?" if view.empty_slots is None else view.empty_slots
        print(f"  {view.distance_text:>7}  {view.station_name}{badge}")
        print(
            f"           bikes: {view.free_bikes}  docks: {slots}  "
            f"score: {view.recommendation_score}"
        )

    best = find_optimal_station(result.stations, config.priority_config())
    if best is not None:
        print(f"\nBest choice: {best.station.name} ({format_distance(best.station.distance)})")


def _print_refresh_status(tracker: NearbyStationsTracker) -> None:
    view = RefreshStatePresenter(
        tracker.refresh_state(), tracker.auto_refresh_interval_ms
    ).to_view_model()
    parts = [view.freshness_text]
    if view.relative_time:
        parts.append(view.relative_time)
    if tracker.last_update is not None:
        parts.append(f"updated at {format_clock_time(tracker.last_update)}")
    if view.time_until_refresh:
        parts.append(view.time_until_refresh)
    print(f"\n[{' | '.join(parts)}]")
    if view.encouragement_message:
        print(view.encouragement_message)
    if tracker.error is not None:
        print(f"Last refresh failed: {tracker.error.user_message}", file=sys.stderr)


async def _current_position(args: argparse.Namespace) -> Coordinates:
    reading = await StaticGeolocationProvider(args.lat, args.lon).current_position()
    return reading.coordinates


async def run_search(config: AppConfig, args: argparse.Namespace) -> None:
    location = await _current_position(args)
    async with aiohttp.ClientSession() as session:
        service = create_search_service(config, session)
        result = await service.search(location)

    if args.json:
        print(json.dumps(_result_to_dict(result, config), indent=2, ensure_ascii=False))
    else:
        _print_result(result, config)


async def run_networks(config: AppConfig, args: argparse.Namespace) -> None:
    location = await _current_position(args)
    async with aiohttp.ClientSession() as session:
        networks = await create_locator(config, session).find_nearest_networks(
            location, count=args.count
        )

    if args.json:
        payload = [
            {
                "id": n.id,
                "name": n.name,
                "city": n.location.city,
                "country": n.location.country,
                "distance": n.distance,
            }
            for n in networks
        ]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    print(f"\nFound {len(networks)} network(s):\n")
    for network in networks:
        print(f"  {network.name} ({network.id})")
        print(
            f"    {network.location.city}, {network.location.country} - "
            f"{format_distance(network.distance)}"
        )


async def run_watch(config: AppConfig, args: argparse.Namespace) -> None:
    location = await _current_position(args)
    async with aiohttp.ClientSession() as session:
        tracker = create_tracker(config, session)

        async def on_refresh() -> None:
            await tracker.refresh()
            if tracker.result is not None:
                _print_result(tracker.result, config)
            _print_refresh_status(tracker)

        await tracker.search(location)
        if tracker.error is not None and tracker.result is None:
            raise tracker.error
        if tracker.result is not None:
            _print_result(tracker.result, config)
        _print_refresh_status(tracker)

        async with AutoRefreshScheduler(tracker, on_refresh, config.auto_refresh_interval_ms):
            await asyncio.Event().wait()


async def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        config = load_config()
        _apply_overrides(config, args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)

    configure_logging(config.log_level)

    try:
        if args.command == "search":
            await run_search(config, args)
        elif args.command == "networks":
            await run_networks(config, args)
        elif args.command == "watch":
            await run_watch(config, args)
    except BikeFinderError as e:
        logger.debug(f"{e.kind}: {e.message}")
        print(f"Error: {e.user_message}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
