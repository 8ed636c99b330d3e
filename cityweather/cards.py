"""Display values for the weather cards."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .entities import WeatherRecord
from .location import Coordinate
from .services.aggregator import AggregatorState


NO_RESULTS_MESSAGE = "No cities found"

# Shown while a device location is known and nothing is being searched.
CURRENT_LOCATION_PLACEHOLDER = WeatherRecord(
    temperature=25.0,
    condition="Sunny",
    location="Current Location",
    humidity=68,
    wind_speed=14.0,
)


@dataclass(frozen=True)
class WeatherCard:
    title: str
    temperature: str
    condition: str
    humidity: str
    wind: str

    @classmethod
    def from_record(cls, record: WeatherRecord) -> "WeatherCard":
        return cls(
            title=record.location,
            temperature=f"{_round(record.temperature)}°",
            condition=record.condition,
            humidity=f"{record.humidity}%",
            wind=f"{_round(record.wind_speed)} km/h",
        )

    def render(self) -> str:
        return f"{self.title}: {self.temperature} {self.condition}, humidity {self.humidity}, wind {self.wind}"


def _round(value: float) -> int:
    # half away from zero, not banker's rounding
    if value < 0:
        return -int(-value + 0.5)
    return int(value + 0.5)


def build_cards(
    state: AggregatorState,
    *,
    search_text: str = "",
    location: Optional[Coordinate] = None,
) -> List[WeatherCard]:
    cards: List[WeatherCard] = []
    if not search_text and location is not None:
        cards.append(WeatherCard.from_record(CURRENT_LOCATION_PLACEHOLDER))
    cards.extend(WeatherCard.from_record(record) for record in state.results)
    return cards


def empty_message(state: AggregatorState, *, search_text: str = "") -> Optional[str]:
    """Return the message shown when a search produced no results."""
    if search_text and not state.results:
        return NO_RESULTS_MESSAGE
    return None


__all__ = [
    "CURRENT_LOCATION_PLACEHOLDER",
    "NO_RESULTS_MESSAGE",
    "WeatherCard",
    "build_cards",
    "empty_message",
]
