from __future__ import annotations

import io
import json

import pytest

from cityweather.cli import CommandError, build_aggregator, build_parser, handle, main
from cityweather.settings import Settings

from conftest import BASE_URL, make_payload


@pytest.fixture
def aggregator():
    return build_aggregator(Settings(api_key="test-key", base_url=BASE_URL, default_cities=("Oslo", "Rome")))


def test_default_cities_as_cards(requests_mock, aggregator):
    requests_mock.get(
        BASE_URL,
        [
            {"json": make_payload(name="Oslo", temp=-2.6, humidity=80, description="snow", speed=3.4)},
            {"json": make_payload(name="Rome", temp=19.5, humidity=40, description="clear sky", speed=2.2)},
        ],
    )
    out = io.StringIO()

    handle(build_parser().parse_args(["--lat", "59.9", "--lon", "10.7"]), aggregator, out)

    assert out.getvalue().splitlines() == [
        "Current Location: 25° Sunny, humidity 68%, wind 14 km/h",
        "Oslo: -3° snow, humidity 80%, wind 3 km/h",
        "Rome: 20° clear sky, humidity 40%, wind 2 km/h",
    ]


def test_search_as_json(requests_mock, aggregator, query):
    requests_mock.get(BASE_URL, json=make_payload(name="Paris"))
    out = io.StringIO()

    handle(build_parser().parse_args(["--city", "Paris", "--json"]), aggregator, out)

    payload = json.loads(out.getvalue())
    assert [item["location"] for item in payload["results"]] == ["Paris"]
    assert payload["error"] is None
    assert query(requests_mock.last_request.url)["q"] == ["Paris"]


def test_search_without_results_fails(requests_mock, aggregator):
    requests_mock.get(BASE_URL, status_code=404, json={"cod": "404", "message": "city not found"})
    out = io.StringIO()

    with pytest.raises(CommandError):
        handle(build_parser().parse_args(["--city", "Atlantis"]), aggregator, out)

    assert out.getvalue() == "No cities found\n"


def test_lat_requires_lon(aggregator):
    with pytest.raises(CommandError):
        handle(build_parser().parse_args(["--lat", "1.0"]), aggregator, io.StringIO())


def test_main_reads_settings_from_env(requests_mock, monkeypatch, capsys):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "env-key")
    monkeypatch.setenv("OPENWEATHER_BASE_URL", BASE_URL)
    requests_mock.get(BASE_URL, json=make_payload(name="Lisbon"))

    assert main(["--city", "Lisbon", "--json"]) == 0

    assert json.loads(capsys.readouterr().out)["results"][0]["location"] == "Lisbon"
    assert "appid=env-key" in requests_mock.last_request.url


def test_main_without_api_key(monkeypatch, capsys):
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)

    assert main([]) == 1

    assert "OPENWEATHER_API_KEY" in capsys.readouterr().err
