"""Collect current weather for a list of cities or a single searched city."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional, Protocol, Tuple

from ..entities import WeatherRecord
from ..providers.base import FetchError
from ..settings import DEFAULT_CITIES


class WeatherClient(Protocol):
    def fetch(self, city_name: str) -> WeatherRecord:
        """Return the current weather for a city or raise ``FetchError``."""
        ...


@dataclass(frozen=True)
class AggregatorState:
    """Snapshot observed by the display layer."""

    results: Tuple[WeatherRecord, ...] = ()
    is_loading: bool = False
    last_error: Optional[FetchError] = None


Listener = Callable[[AggregatorState], None]


def _call_now(callback: Callable[[], None]) -> None:
    callback()


class WeatherAggregator:
    """Run fetch operations and publish their progress as immutable snapshots.

    Every operation (refresh or search) takes a new generation. Starting an
    operation supersedes the one in flight: the older operation stops fetching
    further cities and whatever it receives afterwards is discarded.

    ``dispatch`` receives a zero-argument callable for each notification and
    is expected to run it on the caller's update context, e.g.
    ``loop.call_soon_threadsafe``. By default listeners are called directly.
    """

    def __init__(
        self,
        client: WeatherClient,
        *,
        cities: Iterable[str] = DEFAULT_CITIES,
        dispatch: Optional[Callable[[Callable[[], None]], None]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.client = client
        self.cities: Tuple[str, ...] = tuple(cities)
        self._dispatch = dispatch or _call_now
        self._log = logger or logging.getLogger(self.__class__.__name__)
        self._lock = threading.RLock()
        self._state = AggregatorState()
        self._generation = 0
        self._listeners: List[Listener] = []

    # Observable state ---------------------------------------------------
    @property
    def state(self) -> AggregatorState:
        with self._lock:
            return self._state

    @property
    def results(self) -> Tuple[WeatherRecord, ...]:
        return self.state.results

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    @property
    def last_error(self) -> Optional[FetchError]:
        return self.state.last_error

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for every published snapshot; returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # Operations ---------------------------------------------------------
    def fetch_default_cities(self) -> AggregatorState:
        """Fetch every configured city in order, skipping the ones that fail."""
        generation = self._begin()
        try:
            for city in self.cities:
                if not self._is_current(generation):
                    self._log.debug("Refresh superseded before fetching %s", city)
                    break
                record = self._fetch_one(generation, city)
                if record is not None:
                    self._update(generation, lambda state: replace(state, results=state.results + (record,)))
        finally:
            self._finish(generation)
        return self.state

    def search_city(self, name: str) -> AggregatorState:
        """Replace the results with the weather of a single city.

        An empty name leaves the state untouched.
        """
        if not name:
            return self.state
        generation = self._begin()
        try:
            record = self._fetch_one(generation, name)
            if record is not None:
                self._update(generation, lambda state: replace(state, results=(record,)))
        finally:
            self._finish(generation)
        return self.state

    def apply_search_text(self, text: str) -> AggregatorState:
        """Search for ``text``, or refresh the default cities when it is empty."""
        if text:
            return self.search_city(text)
        return self.fetch_default_cities()

    # Helpers ------------------------------------------------------------
    def _begin(self) -> int:
        with self._lock:
            self._generation += 1
            generation = self._generation
        self._update(generation, lambda state: replace(state, results=(), is_loading=True))
        return generation

    def _finish(self, generation: int) -> None:
        self._update(generation, lambda state: replace(state, is_loading=False))

    def _fetch_one(self, generation: int, city: str) -> Optional[WeatherRecord]:
        try:
            return self.client.fetch(city)
        except FetchError as exc:
            self._log.warning("Error fetching weather for %s: %s", city, exc)
            self._update(generation, lambda state: replace(state, last_error=exc))
            return None

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def _update(self, generation: int, change: Callable[[AggregatorState], AggregatorState]) -> bool:
        with self._lock:
            if generation != self._generation:
                self._log.debug("Discarding update from superseded operation %s", generation)
                return False
            self._state = change(self._state)
            snapshot = self._state
            listeners = list(self._listeners)
        for listener in listeners:
            self._dispatch(lambda listener=listener: listener(snapshot))
        return True


__all__ = ["AggregatorState", "WeatherAggregator", "WeatherClient"]
