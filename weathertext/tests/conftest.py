"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from weathertext.config.defaults import DEFAULT_PROVIDERS
from weathertext.config.schema import AppConfig
from weathertext.errors import ProviderResponseError
from weathertext.models.forecast import (
    CurrentConditions,
    ForecastSummary,
    HourlyReading,
    StandardizedForecast,
)
from weathertext.providers.base import WeatherProvider

FIXTURE_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str):
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


class FakeProvider(WeatherProvider):
    """In-memory provider that records every probe and fetch."""

    def __init__(
        self,
        name: str,
        forecast: StandardizedForecast | None = None,
        error: Exception | None = None,
        available: bool = True,
    ):
        super().__init__()
        self._name = name
        self.forecast = forecast
        self.error = error
        self.available = available
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    async def is_available(self) -> bool:
        self.calls.append("is_available")
        return self.available

    async def get_forecast(self, lat: float, lng: float) -> StandardizedForecast:
        self.calls.append("get_forecast")
        if self.error is not None:
            raise self.error
        assert self.forecast is not None
        return self.forecast


@pytest.fixture
def sample_forecast() -> StandardizedForecast:
    """Current 15°C clear, two hourly entries, 16/14 clear outlook."""
    return StandardizedForecast(
        location="London",
        current=CurrentConditions(temp=15, feels_like=14, humidity=60, description="Clear"),
        hourly=(
            HourlyReading(timestamp=1792335600, temp=16, description="Clear"),
            HourlyReading(timestamp=1792346400, temp=14, description="Clouds"),
        ),
        summary=ForecastSummary(high=16, low=14, predominant_condition="Clear"),
    )


@pytest.fixture
def make_provider(sample_forecast):
    def _make(name: str, ok: bool = True, available: bool = True, error: Exception | None = None):
        if error is None and not ok:
            error = ProviderResponseError(name, 503, "Service Unavailable")
        return FakeProvider(
            name,
            forecast=sample_forecast if ok else None,
            error=error,
            available=available,
        )

    return _make


@pytest.fixture
def default_config() -> AppConfig:
    """Return default AppConfig with default providers."""
    return AppConfig(providers=DEFAULT_PROVIDERS)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "provider_priority": "Open-Meteo,OpenWeatherMap",
        "server": {"port": 8080, "request_timeout_seconds": 8},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR
