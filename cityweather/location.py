"""Seam for device location services.

Location is only used to decide whether the display shows a current location
card. Coordinates are never sent to the weather provider.
"""
from __future__ import annotations

import threading
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Callable, Optional, Protocol


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


class LocationProvider(Protocol):
    """A source of device coordinates, e.g. the platform location manager."""

    def start_updates(self, callback: Callable[[Coordinate], None]) -> None:
        """Begin delivering coordinates to ``callback``."""
        ...

    def stop_updates(self) -> None:
        """Stop delivering coordinates."""
        ...


def request_single_location(
    provider: LocationProvider,
    callback: Optional[Callable[[Coordinate], None]] = None,
) -> "Future[Coordinate]":
    """Subscribe for at most one coordinate, then unsubscribe.

    The returned future resolves with the first coordinate the provider
    delivers; ``callback``, when given, is invoked once with the same value.
    Later deliveries are ignored.
    """
    future: "Future[Coordinate]" = Future()
    delivered = threading.Event()
    lock = threading.Lock()

    def on_update(coordinate: Coordinate) -> None:
        with lock:
            if delivered.is_set():
                return
            delivered.set()
        provider.stop_updates()
        if callback is not None:
            callback(coordinate)
        future.set_result(coordinate)

    provider.start_updates(on_update)
    return future


class LocationTracker:
    """Hold the most recent device coordinate, or ``None`` when unknown."""

    def __init__(self, provider: LocationProvider) -> None:
        self.provider = provider
        self._location: Optional[Coordinate] = None
        self._lock = threading.Lock()

    @property
    def location(self) -> Optional[Coordinate]:
        with self._lock:
            return self._location

    def request(self) -> "Future[Coordinate]":
        return request_single_location(self.provider, self._store)

    def _store(self, coordinate: Coordinate) -> None:
        with self._lock:
            self._location = coordinate


class FixedLocationProvider:
    """Deliver a known coordinate, or nothing when constructed without one."""

    def __init__(self, coordinate: Optional[Coordinate] = None) -> None:
        self.coordinate = coordinate
        self.active = False

    def start_updates(self, callback: Callable[[Coordinate], None]) -> None:
        self.active = True
        if self.coordinate is not None:
            callback(self.coordinate)

    def stop_updates(self) -> None:
        self.active = False


__all__ = [
    "Coordinate",
    "FixedLocationProvider",
    "LocationProvider",
    "LocationTracker",
    "request_single_location",
]
