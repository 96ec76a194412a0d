"""Best-effort reverse geocoding (coordinates -> place name) via Nominatim."""

import asyncio
import logging

import httpx

logger = logging.getLogger(__name__)

NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
DEFAULT_USER_AGENT = "text-weather-service/1.0"
DEFAULT_TIMEOUT_SECONDS = 5.0

# Most specific first
_PLACE_KEYS = ("city", "town", "village", "suburb")


class NominatimReverseGeocoder:
    def __init__(
        self,
        base_url: str = NOMINATIM_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout

    async def location_name(self, lat: float, lng: float) -> str:
        """Return a human-readable place name, or "lat, lng" when none is found.

        Never raises for upstream problems: the forecast is still useful
        without a place name.
        """
        fallback = f"{lat:.2f}, {lng:.2f}"
        url = f"{self.base_url}/reverse"
        params = {"lat": lat, "lon": lng, "format": "json"}
        headers = {"User-Agent": self.user_agent}
        try:
            async with asyncio.timeout(self.timeout):
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await client.get(url, params=params, headers=headers)
            if not resp.is_success:
                logger.warning("Reverse geocoding returned %d for %s", resp.status_code, fallback)
                return fallback
            data = resp.json()
        except (TimeoutError, httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning("Reverse geocoding failed for %s: %s", fallback, e)
            return fallback

        address = data.get("address") if isinstance(data, dict) else None
        if not isinstance(address, dict):
            return fallback
        return _place_label(address) or fallback


def _place_label(address: dict) -> str | None:
    name = next((address[k] for k in _PLACE_KEYS if address.get(k)), None)
    if name is None:
        return None
    if address.get("state") and address.get("country") == "United States":
        return f"{name}, {address['state']}"
    return str(name)
