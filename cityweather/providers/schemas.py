"""Response schemas for the OpenWeather current weather endpoint."""
from __future__ import annotations

import math
from typing import Any, List

from pydantic import BaseModel, Field, StrictStr, field_validator

from ..entities import WeatherRecord

__all__ = ["CurrentWeatherResponse", "MainReadings", "WeatherItem", "WindReadings", "UNKNOWN_CONDITION"]


UNKNOWN_CONDITION = "Unknown"


def _finite_number(value: Any) -> float:
    # bool is an int subclass but never a valid reading
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    try:
        number = float(value)
    except OverflowError as exc:
        raise ValueError("number out of range") from exc
    if not math.isfinite(number):
        raise ValueError("must be finite")
    return number


class MainReadings(BaseModel):
    temp: float = Field(..., allow_inf_nan=False)
    humidity: int = Field(..., ge=0, le=100)

    @field_validator("temp", "humidity", mode="before")
    @classmethod
    def _validate_number(cls, value: Any) -> float:
        return _finite_number(value)


class WindReadings(BaseModel):
    speed: float = Field(..., allow_inf_nan=False)

    @field_validator("speed", mode="before")
    @classmethod
    def _validate_speed(cls, value: Any) -> float:
        return _finite_number(value)


class WeatherItem(BaseModel):
    description: StrictStr


class CurrentWeatherResponse(BaseModel):
    """The subset of the payload a ``WeatherRecord`` is built from; other keys are ignored."""

    name: StrictStr
    main: MainReadings
    wind: WindReadings
    weather: List[WeatherItem]

    def to_record(self) -> WeatherRecord:
        return WeatherRecord(
            temperature=self.main.temp,
            condition=self.weather[0].description if self.weather else UNKNOWN_CONDITION,
            location=self.name,
            humidity=self.main.humidity,
            wind_speed=self.wind.speed,
        )
