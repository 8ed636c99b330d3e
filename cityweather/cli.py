"""Command line entry point: fetch weather for the default cities or a searched city."""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Optional, Sequence, TextIO

from .cards import build_cards, empty_message
from .location import Coordinate, FixedLocationProvider, LocationTracker
from .providers.base import RequestConfig
from .providers.openweather import OpenWeatherClient
from .services.aggregator import AggregatorState, WeatherAggregator
from .settings import ImproperlyConfigured, Settings, load_settings


logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Raised when the command cannot produce any weather."""


def build_client(settings: Settings) -> OpenWeatherClient:
    return OpenWeatherClient(
        api_key=settings.api_key,
        base_url=settings.base_url,
        testing_mode=settings.testing_mode,
        request_config=RequestConfig(timeout=settings.request_timeout),
    )


def build_aggregator(settings: Settings) -> WeatherAggregator:
    return WeatherAggregator(build_client(settings), cities=settings.default_cities)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cityweather", description="Fetch current weather for cities")
    parser.add_argument("--city", type=str, default="", help="City name to search; default cities when omitted")
    parser.add_argument("--lat", type=float, help="Device latitude, enables the current location card")
    parser.add_argument("--lon", type=float, help="Device longitude, enables the current location card")
    parser.add_argument("--json", action="store_true", help="Print records as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    return parser


def handle(
    options: argparse.Namespace,
    aggregator: WeatherAggregator,
    stdout: Optional[TextIO] = None,
) -> AggregatorState:
    if stdout is None:
        stdout = sys.stdout
    if (options.lat is None) != (options.lon is None):
        raise CommandError("--lat and --lon must be given together")

    coordinate = None
    if options.lat is not None:
        coordinate = Coordinate(latitude=options.lat, longitude=options.lon)
    tracker = LocationTracker(FixedLocationProvider(coordinate))
    tracker.request()

    state = aggregator.apply_search_text(options.city)

    if options.json:
        payload = {
            "results": [record.to_dict() for record in state.results],
            "error": str(state.last_error) if state.last_error else None,
        }
        stdout.write(json.dumps(payload) + "\n")
    else:
        for card in build_cards(state, search_text=options.city, location=tracker.location):
            stdout.write(card.render() + "\n")
        message = empty_message(state, search_text=options.city)
        if message:
            stdout.write(message + "\n")

    if not state.results and state.last_error is not None:
        raise CommandError(f"Weather fetch failed: {state.last_error}")
    return state


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    options = parser.parse_args(argv)
    level = logging.DEBUG if options.verbose else os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        aggregator = build_aggregator(load_settings())
        handle(options, aggregator)
    except (CommandError, ImproperlyConfigured) as exc:
        logger.debug("Command failed", exc_info=exc)
        sys.stderr.write(f"cityweather: {exc}\n")
        return 1
    return 0


__all__ = ["CommandError", "build_aggregator", "build_client", "build_parser", "handle", "main"]
