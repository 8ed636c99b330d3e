from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests
from requests import Response


class FetchError(RuntimeError):
    """Base error for a failed weather fetch."""

    def __init__(self, message: str, *, city: Optional[str] = None) -> None:
        super().__init__(message)
        self.city = city


class InvalidRequest(FetchError):
    """Raised when the request URL cannot be built."""


class NetworkError(FetchError):
    """Raised on transport failures: DNS, refused or reset connections, timeouts."""


class DecodeError(FetchError):
    """Raised for non-2xx responses and bodies that do not match the expected schema."""

    def __init__(self, message: str, *, city: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message, city=city)
        self.status_code = status_code


@dataclass
class RequestConfig:
    # None keeps the transport default
    timeout: Optional[float] = None


class WeatherProvider:
    """Base class for HTTP providers: one request per call, no retries."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def _prepare(self, url: str, *, city: Optional[str] = None) -> requests.PreparedRequest:
        try:
            return self.session.prepare_request(requests.Request("GET", url))
        except (requests.RequestException, ValueError) as exc:
            self._log.error("Cannot build request for %r", city, exc_info=exc)
            raise InvalidRequest(f"invalid request url: {exc}", city=city) from exc

    def _send(self, request: requests.PreparedRequest, *, city: Optional[str] = None) -> Response:
        try:
            response = self.session.send(request, timeout=self.request_config.timeout)
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise NetworkError("timeout", city=city) from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise NetworkError("request failed", city=city) from exc
        return self._handle_response(response, city=city)

    def _handle_response(self, response: Response, *, city: Optional[str] = None) -> Response:
        if not 200 <= response.status_code < 300:
            self._log.error("Provider returned %s: %s", response.status_code, response.text[:500])
            raise DecodeError(f"HTTP {response.status_code}", city=city, status_code=response.status_code)
        return response

    def _json(self, response: Response, *, city: Optional[str] = None):
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise DecodeError("invalid json", city=city, status_code=response.status_code) from exc


__all__ = [
    "DecodeError",
    "FetchError",
    "InvalidRequest",
    "NetworkError",
    "RequestConfig",
    "WeatherProvider",
]
