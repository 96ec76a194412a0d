"""Tests for best-effort reverse geocoding."""

import json
from pathlib import Path

import httpx
import pytest
import respx

from weathertext.ingest.reverse_geocoder import NominatimReverseGeocoder

FIXTURE_DIR = Path(__file__).parent.parent / "fixtures"
URL = "https://test-nominatim.example.com/reverse"


@pytest.fixture
def geocoder() -> NominatimReverseGeocoder:
    return NominatimReverseGeocoder(base_url="https://test-nominatim.example.com", timeout=0.5)


class TestLocationName:
    @respx.mock
    @pytest.mark.asyncio
    async def test_us_city_includes_state(self, geocoder: NominatimReverseGeocoder):
        with open(FIXTURE_DIR / "nominatim_reverse_nyc.json") as f:
            payload = json.load(f)
        route = respx.get(URL).mock(return_value=httpx.Response(200, json=payload))

        assert await geocoder.location_name(40.7128, -74.006) == "New York, New York"
        assert "text-weather-service" in route.calls[0].request.headers["user-agent"]

    @respx.mock
    @pytest.mark.asyncio
    async def test_prefers_town_over_village(self, geocoder: NominatimReverseGeocoder):
        respx.get(URL).mock(
            return_value=httpx.Response(
                200, json={"address": {"village": "Smallville", "town": "Bigtown", "country": "France"}}
            )
        )
        assert await geocoder.location_name(45.0, 5.0) == "Bigtown"

    @respx.mock
    @pytest.mark.asyncio
    async def test_no_place_falls_back_to_coordinates(self, geocoder: NominatimReverseGeocoder):
        respx.get(URL).mock(return_value=httpx.Response(200, json={"address": {"country": "Atlantis"}}))
        assert await geocoder.location_name(12.3456, -65.4321) == "12.35, -65.43"

    @respx.mock
    @pytest.mark.asyncio
    async def test_http_error_falls_back(self, geocoder: NominatimReverseGeocoder):
        respx.get(URL).mock(return_value=httpx.Response(503))
        assert await geocoder.location_name(1.0, 2.0) == "1.00, 2.00"

    @respx.mock
    @pytest.mark.asyncio
    async def test_transport_error_falls_back(self, geocoder: NominatimReverseGeocoder):
        respx.get(URL).mock(side_effect=httpx.ConnectTimeout)
        assert await geocoder.location_name(1.0, 2.0) == "1.00, 2.00"
