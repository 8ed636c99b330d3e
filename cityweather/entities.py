from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class WeatherRecord:
    """Current weather for a single city.

    Values are stored as the provider reports them with ``units=metric``:
    - temperature in Celsius
    - humidity as an integer percentage (0-100)
    - wind speed as returned in ``wind.speed``

    ``id`` only identifies the record for list rendering. It takes no part
    in equality or hashing, so two fetches of the same weather compare equal.
    """

    temperature: float
    condition: str
    location: str
    humidity: int
    wind_speed: float
    id: uuid.UUID = field(default_factory=uuid.uuid4, compare=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "temperature": self.temperature,
            "condition": self.condition,
            "location": self.location,
            "humidity": self.humidity,
            "wind_speed": self.wind_speed,
        }


__all__ = ["WeatherRecord"]
