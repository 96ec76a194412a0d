"""Render a StandardizedForecast as the plain-text reply message."""

from datetime import UTC, datetime

from weathertext.models.common import round_half_up
from weathertext.models.forecast import HourlyReading, StandardizedForecast


def _deg(value: float) -> str:
    return f"{round_half_up(value)}°C"


def format_clock(timestamp: int) -> str:
    """12-hour clock hour in UTC, e.g. "3 PM"."""
    dt = datetime.fromtimestamp(timestamp, UTC)
    hour = dt.hour % 12 or 12
    suffix = "AM" if dt.hour < 12 else "PM"
    return f"{hour} {suffix}"


def _hour_line(hour: HourlyReading) -> str:
    return f"{format_clock(hour.timestamp)}: {_deg(hour.temp)} {hour.description}"


def format_forecast(forecast: StandardizedForecast, provider_name: str | None = None) -> str:
    """Four-section reply: header, right now, next few hours, outlook."""
    current = forecast.current
    summary = forecast.summary

    header = [f"Weather forecast for {forecast.location}:"]
    if provider_name:
        header.append(f"(via {provider_name})")

    sections = [
        "\n".join(header),
        "\n".join([
            "Right now:",
            f"{_deg(current.temp)} {current.description}",
            f"Feels like {_deg(current.feels_like)}",
            f"Humidity: {round_half_up(current.humidity)}%",
        ]),
        "\n".join(["Next few hours:", *(_hour_line(h) for h in forecast.hourly)]),
        "\n".join([
            "12-hour outlook:",
            f"High: {_deg(summary.high)} Low: {_deg(summary.low)}",
            f"Predominantly {summary.predominant_condition}",
        ]),
    ]
    return "\n\n".join(sections)
