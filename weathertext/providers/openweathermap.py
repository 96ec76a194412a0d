"""OpenWeatherMap 5-day / 3-hour forecast adapter."""

import logging

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

OPENWEATHERMAP_BASE_URL = "https://api.openweathermap.org"


class OpenWeatherMapProvider(WeatherProvider):
    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHERMAP_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        super().__init__(timeout=timeout)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

    @property
    def name(self) -> str:
        return "OpenWeatherMap"

    async def is_available(self) -> bool:
        return await self._probe(
            f"{self.base_url}/data/2.5/weather",
            params={"lat": 0, "lon": 0, "appid": self.api_key},
        )

    async def get_forecast(self, lat: float, lng: float) -> StandardizedForecast:
        data = await self._get_json(
            f"{self.base_url}/data/2.5/forecast",
            params={"lat": lat, "lon": lng, "appid": self.api_key, "units": "metric"},
        )
        if not isinstance(data, dict) or not data.get("list") or not isinstance(data.get("city"), dict):
            raise self._invalid_payload()

        try:
            # 3-hour steps: four entries cover twelve hours
            window = [_parse_interval(item) for item in select_window(data["list"])]
            location = str(data["city"]["name"])
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error("OpenWeatherMap payload could not be normalized: %s", e)
            raise self._invalid_payload() from e

        return build_forecast(location, window)


def _parse_interval(item: dict) -> ForecastInterval:
    main = item["main"]
    return ForecastInterval(
        timestamp=int(item["dt"]),
        temp=finite(main["temp"]),
        feels_like=finite(main["feels_like"]),
        humidity=finite(main["humidity"]),
        description=str(item["weather"][0]["description"]),
    )
