"""Inbound message handling: text in, reply text out."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from weathertext.errors import AllProvidersFailedError, LocationError
from weathertext.ingest.location_parser import ThreeWordResolver, parse_location
from weathertext.models.location import NOT_A_LOCATION
from weathertext.services.weather_manager import WeatherProviderManager

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0

GUIDANCE_REPLY = (
    'Please send a valid What3Words location (e.g., "///filled.count.soap" or '
    '"filled.count.soap") or coordinates (e.g., "51.5074,-0.1278")'
)
INVALID_REQUEST_REPLY = "Invalid request. Please send a location."
PROVIDERS_FAILED_REPLY = "Unable to fetch weather data at this time. Please try again later."
TIMEOUT_REPLY = "Request timed out. Please try again."
GENERIC_ERROR_REPLY = "Sorry, there was an error processing your request. Please try again."


class MessageSender(Protocol):
    async def send_message(self, to: str, body: str) -> str: ...


@dataclass(frozen=True)
class Reply:
    text: str
    ok: bool


class MessageHandler:
    """Maps ``(sender, text)`` to a reply; never produces an empty reply."""

    def __init__(
        self,
        manager: WeatherProviderManager,
        resolver: ThreeWordResolver | None = None,
        sender: MessageSender | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        preferred_provider: str | None = None,
    ):
        self.manager = manager
        self.resolver = resolver
        self.sender = sender
        self.timeout = timeout
        self.preferred_provider = preferred_provider

    async def respond(self, sender: str, text: str) -> Reply:
        """Build the reply, flagging whether the request succeeded."""
        logger.info("Received message from %s: %s", sender, text)
        if not text or not text.strip():
            return Reply(INVALID_REQUEST_REPLY, ok=False)

        try:
            async with asyncio.timeout(self.timeout):
                return await self._forecast_reply(text)
        except TimeoutError:
            logger.warning("Request from %s timed out after %.1fs", sender, self.timeout)
            return Reply(TIMEOUT_REPLY, ok=False)
        except LocationError as e:
            logger.info("Location error for %s: %s", sender, e)
            return Reply(str(e), ok=False)
        except AllProvidersFailedError as e:
            logger.error("Forecast failed for %s: %s", sender, e)
            return Reply(PROVIDERS_FAILED_REPLY, ok=False)
        except Exception:
            logger.exception("Unexpected error processing message from %s", sender)
            return Reply(GENERIC_ERROR_REPLY, ok=False)

    async def handle(self, sender: str, text: str) -> str:
        reply = await self.respond(sender, text)
        return reply.text

    async def handle_and_send(self, sender: str, text: str) -> str:
        """Handle the message and deliver the reply. Raises DeliveryError."""
        if self.sender is None:
            raise RuntimeError("No outbound message sender configured")
        reply = await self.handle(sender, text)
        await self.sender.send_message(sender, reply)
        return reply

    async def _forecast_reply(self, text: str) -> Reply:
        coords = await parse_location(text, self.resolver)
        if coords is NOT_A_LOCATION:
            return Reply(GUIDANCE_REPLY, ok=True)
        forecast = await self.manager.get_forecast(
            coords.lat, coords.lng, preferred=self.preferred_provider
        )
        return Reply(forecast, ok=True)
