"""Tests for reply text layout."""

from dataclasses import replace

from weathertext.models.forecast import StandardizedForecast
from weathertext.reporting.formatters import format_clock, format_forecast


class TestFormatClock:
    def test_afternoon(self):
        assert format_clock(1792335600) == "3 PM"

    def test_noon_and_midnight(self):
        assert format_clock(1792324800) == "12 PM"
        assert format_clock(1792281600) == "12 AM"


class TestFormatForecast:
    def test_full_layout(self, sample_forecast: StandardizedForecast):
        text = format_forecast(sample_forecast, "OpenWeatherMap")
        assert text == (
            "Weather forecast for London:\n"
            "(via OpenWeatherMap)\n"
            "\n"
            "Right now:\n"
            "15°C Clear\n"
            "Feels like 14°C\n"
            "Humidity: 60%\n"
            "\n"
            "Next few hours:\n"
            "3 PM: 16°C Clear\n"
            "6 PM: 14°C Clouds\n"
            "\n"
            "12-hour outlook:\n"
            "High: 16°C Low: 14°C\n"
            "Predominantly Clear"
        )

    def test_without_provider_name(self, sample_forecast: StandardizedForecast):
        text = format_forecast(sample_forecast)
        assert "(via" not in text
        assert text.startswith("Weather forecast for London:\n\nRight now:")

    def test_empty_hourly_keeps_heading(self, sample_forecast: StandardizedForecast):
        text = format_forecast(replace(sample_forecast, hourly=()))
        assert "Next few hours:\n\n12-hour outlook:" in text
