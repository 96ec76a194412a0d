"""Tests for the Open-Meteo adapter with mocked httpx."""

import asyncio
import json
from datetime import UTC, datetime
from pathlib import Path

import httpx
import pytest
import respx

from weathertext.errors import ProviderResponseError, ProviderTimeoutError
from weathertext.providers.open_meteo import OpenMeteoProvider, weather_label

FIXTURE_DIR = Path(__file__).parent.parent / "fixtures"
FORECAST_URL = "https://test-meteo.example.com/v1/forecast"


async def _stall(request: httpx.Request) -> httpx.Response:
    await asyncio.sleep(2)
    return httpx.Response(200, json={})


class StubGeocoder:
    async def location_name(self, lat: float, lng: float) -> str:
        return "Stuttgart"


def _clock(hour: int, minute: int = 30):
    return lambda: datetime(2026, 10, 18, hour, minute, tzinfo=UTC)


def _provider(clock) -> OpenMeteoProvider:
    return OpenMeteoProvider(
        geocoder=StubGeocoder(),
        base_url="https://test-meteo.example.com",
        timeout=0.5,
        clock=clock,
    )


@pytest.fixture
def hourly_forecast() -> dict:
    with open(FIXTURE_DIR / "open_meteo_forecast.json") as f:
        return json.load(f)


class TestGetForecast:
    @respx.mock
    @pytest.mark.asyncio
    async def test_window_starts_at_current_hour(self, hourly_forecast: dict):
        route = respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, json=hourly_forecast))

        forecast = await _provider(_clock(12)).get_forecast(48.7758, 9.1829)

        assert forecast.location == "Stuttgart"
        assert forecast.current.temp == 16
        assert forecast.current.feels_like == 15
        assert forecast.current.humidity == 70
        assert forecast.current.description == "Clear sky"
        assert [h.timestamp for h in forecast.hourly] == [1792335600, 1792346400, 1792357200]
        assert [h.description for h in forecast.hourly] == ["Overcast", "Clear sky", "Slight rain"]
        assert forecast.summary.high == 21
        assert forecast.summary.low == 16
        assert forecast.summary.predominant_condition == "Clear sky"

        params = route.calls[0].request.url.params
        assert params["latitude"] == "48.77580"
        assert params["timeformat"] == "unixtime"

    @respx.mock
    @pytest.mark.asyncio
    async def test_late_in_series_shortens_hourly(self, hourly_forecast: dict):
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, json=hourly_forecast))

        # 20:00 and 23:00 remain
        forecast = await _provider(_clock(20)).get_forecast(0, 0)
        assert forecast.current.temp == 20
        assert len(forecast.hourly) == 1

    @respx.mock
    @pytest.mark.asyncio
    async def test_series_in_the_past(self, hourly_forecast: dict):
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, json=hourly_forecast))
        clock = lambda: datetime(2026, 10, 20, 12, 0, tzinfo=UTC)  # noqa: E731
        with pytest.raises(ProviderResponseError, match="Invalid response format"):
            await _provider(clock).get_forecast(0, 0)

    @respx.mock
    @pytest.mark.asyncio
    async def test_missing_field(self, hourly_forecast: dict):
        del hourly_forecast["hourly"]["weather_code"]
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, json=hourly_forecast))
        with pytest.raises(ProviderResponseError):
            await _provider(_clock(12)).get_forecast(0, 0)

    @respx.mock
    @pytest.mark.asyncio
    @pytest.mark.parametrize("literal", ["1e400", "-Infinity", "NaN"])
    async def test_non_finite_value_is_invalid(self, hourly_forecast: dict, literal: str):
        hourly_forecast["hourly"]["apparent_temperature"][12] = 12345.5
        body = json.dumps(hourly_forecast).replace("12345.5", literal)
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, text=body))
        with pytest.raises(ProviderResponseError, match="Invalid response format"):
            await _provider(_clock(12)).get_forecast(0, 0)

    @respx.mock
    @pytest.mark.asyncio
    async def test_slow_response_cancelled_at_deadline(self):
        provider = OpenMeteoProvider(
            geocoder=StubGeocoder(),
            base_url="https://test-meteo.example.com",
            timeout=0.1,
            clock=_clock(12),
        )
        respx.get(FORECAST_URL).mock(side_effect=_stall)
        with pytest.raises(ProviderTimeoutError):
            await provider.get_forecast(0, 0)


class TestWeatherLabel:
    def test_known(self):
        assert weather_label(95) == "Thunderstorm"

    def test_unknown(self):
        assert weather_label(42) == "Code 42"
