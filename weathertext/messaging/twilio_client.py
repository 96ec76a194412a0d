"""Twilio Messages API client for outbound SMS replies."""

import asyncio
import logging

import httpx

from weathertext.errors import DeliveryError

logger = logging.getLogger(__name__)

TWILIO_API_BASE = "https://api.twilio.com"
DEFAULT_TIMEOUT_SECONDS = 10.0


class TwilioClient:
    """Thin wrapper around POST /2010-04-01/Accounts/{sid}/Messages.json."""

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        base_url: str = TWILIO_API_BASE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        if not account_sid or not auth_token or not from_number:
            raise DeliveryError("Twilio account SID, auth token and from number are required")
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def send_message(self, to: str, body: str) -> str:
        """Send ``body`` to ``to``. Returns the Twilio message SID."""
        url = f"{self.base_url}/2010-04-01/Accounts/{self.account_sid}/Messages.json"
        data = {"To": to, "From": self.from_number, "Body": body}
        logger.info("Sending message to %s (%d chars)", to, len(body))
        try:
            async with asyncio.timeout(self.timeout):
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await client.post(
                        url, data=data, auth=(self.account_sid, self.auth_token)
                    )
        except (TimeoutError, httpx.RequestError) as e:
            logger.error("Twilio request failed for %s: %s", to, e)
            raise DeliveryError(f"Request failed: {e!r}") from e

        if resp.status_code >= 400:
            body_text = resp.text
            logger.error("Twilio API %d for %s: %s", resp.status_code, to, body_text)
            raise DeliveryError(f"HTTP {resp.status_code}: {body_text}", resp.status_code)

        try:
            return str(resp.json().get("sid", ""))
        except ValueError:
            return ""
