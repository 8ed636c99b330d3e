from __future__ import annotations

from typing import Callable, List, Optional

from cityweather.location import Coordinate, FixedLocationProvider, LocationTracker, request_single_location


class ManualLocationProvider:
    """Delivers coordinates only when the test pushes them."""

    def __init__(self) -> None:
        self.callback: Optional[Callable[[Coordinate], None]] = None
        self.started = 0
        self.stopped = 0

    def start_updates(self, callback: Callable[[Coordinate], None]) -> None:
        self.started += 1
        self.callback = callback

    def stop_updates(self) -> None:
        self.stopped += 1

    def push(self, coordinate: Coordinate) -> None:
        assert self.callback is not None
        self.callback(coordinate)


def test_single_location_resolves_once_and_unsubscribes():
    provider = ManualLocationProvider()
    received: List[Coordinate] = []

    future = request_single_location(provider, received.append)
    assert not future.done()

    provider.push(Coordinate(40.71, -74.0))
    provider.push(Coordinate(51.5, -0.12))

    assert future.result(timeout=0) == Coordinate(40.71, -74.0)
    assert received == [Coordinate(40.71, -74.0)]
    assert provider.started == 1
    assert provider.stopped == 1


def test_tracker_stores_the_first_coordinate():
    provider = FixedLocationProvider(Coordinate(35.68, 139.69))
    tracker = LocationTracker(provider)
    assert tracker.location is None

    tracker.request()

    assert tracker.location == Coordinate(35.68, 139.69)
    assert provider.active is False


def test_tracker_without_location_stays_empty():
    provider = FixedLocationProvider()
    tracker = LocationTracker(provider)

    future = tracker.request()

    assert tracker.location is None
    assert not future.done()
    assert provider.active is True
