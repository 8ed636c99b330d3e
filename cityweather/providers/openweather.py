"""OpenWeather current weather client."""
from __future__ import annotations

import os
from typing import Any, Optional
from urllib.parse import quote

from pydantic import ValidationError

from .base import DecodeError, WeatherProvider
from .schemas import UNKNOWN_CONDITION, CurrentWeatherResponse
from ..entities import WeatherRecord


class OpenWeatherClient(WeatherProvider):
    """Fetch current weather for a city name from the OpenWeather endpoint."""

    name = "openweather"
    base_url = "https://api.openweathermap.org/data/2.5/weather"
    units = "metric"

    def __init__(
        self,
        *,
        api_key: str,
        base_url: Optional[str] = None,
        testing_mode: Optional[bool] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url or self.base_url
        if testing_mode is None:
            testing_mode = os.environ.get("TESTING_MODE", "0") == "1"
        self._testing_mode = testing_mode

    def fetch(self, city_name: str) -> WeatherRecord:
        """Return the current weather for ``city_name``.

        Raises ``InvalidRequest``, ``NetworkError`` or ``DecodeError``. A failure
        is reported once; nothing is retried.
        """
        request = self._prepare(self.build_url(city_name), city=city_name)
        response = self._send(request, city=city_name)
        self._log_response(request.url, response)
        payload = self._json(response, city=city_name)
        try:
            return decode_weather(payload)
        except DecodeError as exc:
            exc.city = city_name
            exc.status_code = response.status_code
            self._log.error("Unexpected payload for %s: %s", city_name, exc)
            raise

    def build_url(self, city_name: str) -> str:
        return f"{self.base_url}?q={encode_city(city_name)}&appid={self.api_key}&units={self.units}"

    def _log_response(self, url: Optional[str], response) -> None:
        if not self._testing_mode:
            return
        self._log.info(
            "OpenWeather request",
            extra={"url": url, "status": response.status_code, "body": response.text[:500]},
        )


def encode_city(city_name: str) -> str:
    """Percent-encode a city name for the ``q`` parameter, or return it as is."""
    try:
        return quote(city_name, safe="")
    except UnicodeEncodeError:
        return city_name


def decode_weather(payload: Any) -> WeatherRecord:
    """Validate a current weather payload and build a record from it.

    The whole payload is checked before the record is built, so a malformed
    response never produces a partially filled record.
    """
    try:
        response = CurrentWeatherResponse.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(f"unexpected payload: {_describe(exc)}") from exc
    return response.to_record()


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'response'}: {error['msg']}" for error in exc.errors()
    )


__all__ = ["OpenWeatherClient", "UNKNOWN_CONDITION", "decode_weather", "encode_city"]
