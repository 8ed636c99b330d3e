from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlsplit

import pytest

from requests_mock import Mocker

from cityweather.providers.openweather import OpenWeatherClient


BASE_URL = "https://owm.test/data/2.5/weather"


@pytest.fixture
def requests_mock():
    with Mocker() as mock:
        yield mock


@pytest.fixture
def client() -> OpenWeatherClient:
    return OpenWeatherClient(api_key="test-key", base_url=BASE_URL)


def make_payload(
    name: str = "New York",
    temp: Any = 23.4,
    humidity: Any = 65,
    description: Optional[str] = "Sunny",
    speed: Any = 12.0,
) -> Dict[str, Any]:
    weather: List[Dict[str, Any]] = []
    if description is not None:
        weather.append({"id": 800, "main": "Clear", "description": description, "icon": "01d"})
    return {
        "coord": {"lon": -74.006, "lat": 40.7143},
        "weather": weather,
        "main": {"temp": temp, "feels_like": 22.9, "pressure": 1015, "humidity": humidity},
        "wind": {"speed": speed, "deg": 240},
        "name": name,
        "cod": 200,
    }


def query_params(url: str) -> Dict[str, List[str]]:
    return parse_qs(urlsplit(url).query)


@pytest.fixture
def query():
    return query_params
