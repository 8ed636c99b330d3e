"""Environment driven settings for the weather client."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple


DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_CITIES = ("New York", "London", "Tokyo", "Sydney")


class ImproperlyConfigured(RuntimeError):
    """Raised when required configuration is missing or malformed."""


def env(name: str, default: str | None = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    value = os.environ.get(name, default)
    if value is None:
        raise ImproperlyConfigured(f"Environment variable {name} is required")
    return value


@dataclass(frozen=True)
class Settings:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    default_cities: Tuple[str, ...] = DEFAULT_CITIES
    request_timeout: Optional[float] = None
    testing_mode: bool = False


def load_settings() -> Settings:
    api_key = env("OPENWEATHER_API_KEY").strip()
    if not api_key:
        raise ImproperlyConfigured("Environment variable OPENWEATHER_API_KEY is empty")

    cities = tuple(
        city.strip() for city in env("WEATHER_DEFAULT_CITIES", ",".join(DEFAULT_CITIES)).split(",") if city.strip()
    )
    if not cities:
        raise ImproperlyConfigured("WEATHER_DEFAULT_CITIES must name at least one city")

    raw_timeout = env("WEATHER_REQUEST_TIMEOUT", "").strip()
    try:
        timeout = float(raw_timeout) if raw_timeout else None
    except ValueError as exc:
        raise ImproperlyConfigured(f"WEATHER_REQUEST_TIMEOUT must be a number, got {raw_timeout!r}") from exc

    return Settings(
        api_key=api_key,
        base_url=env("OPENWEATHER_BASE_URL", DEFAULT_BASE_URL),
        default_cities=cities,
        request_timeout=timeout,
        testing_mode=os.environ.get("TESTING_MODE", "0") == "1",
    )


__all__ = ["DEFAULT_BASE_URL", "DEFAULT_CITIES", "ImproperlyConfigured", "Settings", "env", "load_settings"]
