"""Tomorrow.io v4 hourly forecast adapter."""

import logging
from datetime import datetime

from weathertext.ingest.reverse_geocoder import NominatimReverseGeocoder
from weathertext.models.forecast import StandardizedForecast
from weathertext.providers.base import (
    DEFAULT_TIMEOUT_SECONDS,
    ForecastInterval,
    WeatherProvider,
    build_forecast,
    finite,
    select_window,
)

logger = logging.getLogger(__name__)

TOMORROW_IO_BASE_URL = "https://api.tomorrow.io"
FIELDS = ("temperature", "temperatureApparent", "humidity", "weatherCode")

WEATHER_CODE_LABELS = {
    0: "Unknown",
    1000: "Clear",
    1100: "Mostly Clear",
    1101: "Partly Cloudy",
    1102: "Mostly Cloudy",
    1001: "Cloudy",
    2000: "Fog",
    2100: "Light Fog",
    4000: "Drizzle",
    4001: "Rain",
    4200: "Light Rain",
    4201: "Heavy Rain",
    5000: "Snow",
    5001: "Flurries",
    5100: "Light Snow",
    5101: "Heavy Snow",
    6000: "Freezing Drizzle",
    6001: "Freezing Rain",
    6200: "Light Freezing Rain",
    6201: "Heavy Freezing Rain",
    7000: "Ice Pellets",
    7101: "Heavy Ice Pellets",
    7102: "Light Ice Pellets",
    8000: "Thunderstorm",
}


def weather_label(code: int) -> str:
    return WEATHER_CODE_LABELS.get(code, "Unknown")


class TomorrowIOProvider(WeatherProvider):
    def __init__(
        self,
        api_key: str,
        geocoder: NominatimReverseGeocoder | None = None,
        base_url: str = TOMORROW_IO_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        super().__init__(timeout=timeout)
        self.api_key = api_key
        self.geocoder = geocoder or NominatimReverseGeocoder(timeout=timeout)
        self.base_url = base_url.rstrip("/")

    @property
    def name(self) -> str:
        return "Tomorrow.io"

    def _params(self, lat: float, lng: float, **extra: str) -> dict[str, str]:
        return {
            "location": f"{lat},{lng}",
            "fields": ",".join(FIELDS),
            "apikey": self.api_key,
            **extra,
        }

    async def is_available(self) -> bool:
        return await self._probe(
            f"{self.base_url}/v4/weather/forecast", params=self._params(0, 0)
        )

    async def get_forecast(self, lat: float, lng: float) -> StandardizedForecast:
        data = await self._get_json(
            f"{self.base_url}/v4/weather/forecast",
            params=self._params(lat, lng, units="metric", timesteps="1h"),
        )
        timelines = data.get("timelines") if isinstance(data, dict) else None
        hourly = timelines.get("hourly") if isinstance(timelines, dict) else None
        if not isinstance(hourly, list) or not hourly:
            logger.error("Tomorrow.io response had no hourly timeline")
            raise self._invalid_payload()

        try:
            # Hourly steps: every third hour keeps the twelve-hour window
            window = [_parse_interval(item) for item in select_window(hourly, step=3)]
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Tomorrow.io payload could not be normalized: %s", e)
            raise self._invalid_payload() from e

        location = await self.geocoder.location_name(lat, lng)
        return build_forecast(location, window)


def _parse_interval(item: dict) -> ForecastInterval:
    values = item["values"]
    return ForecastInterval(
        timestamp=int(datetime.fromisoformat(item["time"]).timestamp()),
        temp=finite(values["temperature"]),
        feels_like=finite(values["temperatureApparent"]),
        humidity=finite(values["humidity"]),
        description=weather_label(int(values["weatherCode"])),
    )
