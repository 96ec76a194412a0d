"""Weather provider contract and the normalization shared by every adapter."""

import asyncio
import logging
import math
from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import httpx

from weathertext.errors import (
    ProviderGenericError,
    ProviderResponseError,
    ProviderTimeoutError,
)
from weathertext.models.common import round_half_up
from weathertext.models.forecast import (
    CurrentConditions,
    ForecastSummary,
    HourlyReading,
    StandardizedForecast,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0

# Current reading plus three more
WINDOW_SIZE = 4

# Status reported for 2xx responses whose payload cannot be normalized
INVALID_PAYLOAD_STATUS = 502
INVALID_PAYLOAD_MESSAGE = "Invalid response format from weather service"


@dataclass(frozen=True)
class ForecastInterval:
    """One vendor time-series entry, already converted to °C."""

    timestamp: int
    temp: float
    feels_like: float
    humidity: float
    description: str


def finite(value: Any) -> float:
    """Convert a payload number to float, rejecting NaN and infinities."""
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"non-finite value in payload: {value!r}")
    return number


def select_window(intervals: Sequence[ForecastInterval], step: int = 1) -> list[ForecastInterval]:
    """First WINDOW_SIZE intervals, taking every ``step``-th entry.

    Sources with 3-hour steps use step=1; hourly sources use step=3 so the
    window still spans twelve hours.
    """
    return list(intervals[: step * WINDOW_SIZE : step])


def predominant_condition(descriptions: Sequence[str]) -> str:
    """Most frequent description.

    Ties go to the description that sorts last, so the result does not
    depend on input order.
    """
    if not descriptions:
        return ""
    counts = Counter(descriptions)
    return max(counts.items(), key=lambda kv: (kv[1], kv[0]))[0]


def summarize(window: Sequence[ForecastInterval]) -> ForecastSummary:
    """High/low and predominant condition over current + hourly readings."""
    temps = [i.temp for i in window]
    return ForecastSummary(
        high=round_half_up(max(temps)),
        low=round_half_up(min(temps)),
        predominant_condition=predominant_condition([i.description for i in window]),
    )


def build_forecast(location: str, window: Sequence[ForecastInterval]) -> StandardizedForecast:
    """Assemble a StandardizedForecast from a non-empty window."""
    first = window[0]
    return StandardizedForecast(
        location=location,
        current=CurrentConditions(
            temp=round_half_up(first.temp),
            feels_like=round_half_up(first.feels_like),
            humidity=round_half_up(first.humidity),
            description=first.description,
        ),
        hourly=tuple(
            HourlyReading(
                timestamp=i.timestamp,
                temp=round_half_up(i.temp),
                description=i.description,
            )
            for i in window[1:]
        ),
        summary=summarize(window),
    )


class WeatherProvider(ABC):
    """A remote weather source behind a uniform forecast contract.

    get_forecast raises ProviderTimeoutError, ProviderResponseError or
    ProviderGenericError and never returns a partially populated forecast.
    is_available never raises.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.timeout = timeout

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable identifier used in configuration and diagnostics."""

    @abstractmethod
    async def is_available(self) -> bool:
        ...

    @abstractmethod
    async def get_forecast(self, lat: float, lng: float) -> StandardizedForecast:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"

    # --- HTTP helpers shared by the adapters ---

    async def _get(self, url: str, params: dict | None = None, headers: dict | None = None) -> httpx.Response:
        async with asyncio.timeout(self.timeout):
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await client.get(url, params=params, headers=headers)

    async def _probe(self, url: str, params: dict | None = None) -> bool:
        try:
            resp = await self._get(url, params=params)
        except (TimeoutError, httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("%s availability probe failed: %s", self.name, e)
            return False
        if not resp.is_success:
            logger.warning("%s availability probe returned %d", self.name, resp.status_code)
        return resp.is_success

    async def _get_json(self, url: str, params: dict | None = None, headers: dict | None = None) -> Any:
        """GET and decode JSON, mapping every failure onto the provider error types."""
        try:
            resp = await self._get(url, params=params, headers=headers)
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.warning("%s request timed out after %.1fs", self.name, self.timeout)
            raise ProviderTimeoutError(self.name) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.error("%s request failed: %s", self.name, e)
            raise ProviderGenericError(self.name) from e

        if not resp.is_success:
            detail = _error_detail(resp)
            logger.error("%s returned %d: %s", self.name, resp.status_code, detail)
            raise ProviderResponseError(self.name, resp.status_code, detail)

        try:
            return resp.json()
        except ValueError as e:
            raise ProviderResponseError(self.name, INVALID_PAYLOAD_STATUS, INVALID_PAYLOAD_MESSAGE) from e

    def _invalid_payload(self) -> ProviderResponseError:
        return ProviderResponseError(self.name, INVALID_PAYLOAD_STATUS, INVALID_PAYLOAD_MESSAGE)


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return resp.reason_phrase
