"""what3words API client: resolves three-word addresses to coordinates."""

import asyncio
import logging

import httpx

from weathertext.errors import LocationFormatError, LocationLookupError
from weathertext.models.location import Coordinates

logger = logging.getLogger(__name__)

WHAT3WORDS_BASE_URL = "https://api.what3words.com"
DEFAULT_TIMEOUT_SECONDS = 5.0

MALFORMED_RESPONSE_MESSAGE = "Invalid response format from What3Words API (malformed upstream response)"
GENERIC_LOOKUP_MESSAGE = "Unable to process location. Please check your input and try again."


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class What3WordsClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = WHAT3WORDS_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def resolve(self, words: str) -> Coordinates:
        """Convert a ``word.word.word`` address to coordinates.

        Raises LocationLookupError on timeout, upstream error status,
        malformed payload or any transport failure.
        """
        url = f"{self.base_url}/v3/convert-to-coordinates"
        params = {"words": words, "key": self.api_key}
        try:
            async with asyncio.timeout(self.timeout):
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await client.get(url, params=params)
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.warning("what3words lookup for %s timed out after %.1fs", words, self.timeout)
            raise LocationLookupError(
                "What3Words lookup timed out. Please try again."
            ) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.error("what3words request failed for %s: %s", words, e)
            raise LocationLookupError(GENERIC_LOOKUP_MESSAGE) from e

        if not resp.is_success:
            message = _error_message(resp)
            logger.warning("what3words returned %d for %s: %s", resp.status_code, words, message)
            raise LocationLookupError(f"What3Words API error: {message}")

        try:
            data = resp.json()
        except ValueError as e:
            raise LocationLookupError(MALFORMED_RESPONSE_MESSAGE) from e

        coords = data.get("coordinates") if isinstance(data, dict) else None
        if (
            not isinstance(coords, dict)
            or not _is_number(coords.get("lat"))
            or not _is_number(coords.get("lng"))
        ):
            raise LocationLookupError(MALFORMED_RESPONSE_MESSAGE)

        try:
            return Coordinates(lat=float(coords["lat"]), lng=float(coords["lng"]))
        except LocationFormatError as e:
            raise LocationLookupError(MALFORMED_RESPONSE_MESSAGE) from e


def _error_message(resp: httpx.Response) -> str:
    """Pull ``error.message`` out of a what3words error body, else the reason phrase."""
    try:
        body = resp.json()
    except ValueError:
        return resp.reason_phrase
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return resp.reason_phrase
