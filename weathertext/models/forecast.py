"""Normalized forecast models shared by every weather provider."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CurrentConditions:
    temp: float  # °C
    feels_like: float  # °C
    humidity: int  # percent
    description: str


@dataclass(frozen=True)
class HourlyReading:
    timestamp: int  # epoch seconds, UTC
    temp: float
    description: str


@dataclass(frozen=True)
class ForecastSummary:
    high: float
    low: float
    predominant_condition: str

    def __post_init__(self) -> None:
        if self.high < self.low:
            raise ValueError(
                f"forecast summary high ({self.high}) is below low ({self.low})"
            )


@dataclass(frozen=True)
class StandardizedForecast:
    location: str
    current: CurrentConditions
    summary: ForecastSummary
    hourly: tuple[HourlyReading, ...] = field(default_factory=tuple)
