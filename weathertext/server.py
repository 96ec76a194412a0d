"""FastAPI webhook receiver for inbound SMS."""

import logging
from xml.sax.saxutils import escape

from fastapi import FastAPI, Form
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from weathertext.errors import DeliveryError
from weathertext.models.common import utc_now_iso
from weathertext.services.message_handler import MessageHandler

logger = logging.getLogger(__name__)


class SimulatedMessage(BaseModel):
    From: str = ""
    Body: str = ""


def _twiml(message: str) -> Response:
    body = f'<?xml version="1.0" encoding="UTF-8"?><Response><Message>{escape(message)}</Message></Response>'
    return Response(content=body, media_type="application/xml")


def create_app(handler: MessageHandler, dev_endpoints: bool = False) -> FastAPI:
    app = FastAPI(title="Text Weather Service", version="0.1.0")

    @app.get("/health")
    def health():
        return {"status": "ok", "timestamp": utc_now_iso()}

    @app.get("/providers")
    async def providers():
        """Priority order, last successful provider and current availability."""
        manager = handler.manager
        return {
            "priority_order": manager.priority_order,
            "active_provider": manager.active_provider.name,
            "availability": await manager.availability(),
        }

    @app.post("/sms")
    async def sms_webhook(From: str = Form(""), Body: str = Form("")):
        """Twilio inbound webhook.

        Replies through the outbound client when one is configured, else
        inline as TwiML.
        """
        sender = From.strip()
        if handler.sender is None:
            return _twiml(await handler.handle(sender, Body))
        try:
            await handler.handle_and_send(sender, Body)
        except DeliveryError as e:
            logger.error("Failed to deliver reply to %s: %s", sender, e)
            return Response(status_code=500)
        return Response(status_code=200)

    if dev_endpoints:

        @app.post("/dev/simulate-text")
        async def simulate_text(msg: SimulatedMessage):
            """Run the full pipeline without sending anything."""
            errors = [
                f"{field} is required"
                for field, value in (("Body", msg.Body), ("From", msg.From))
                if not value.strip()
            ]
            if errors:
                return JSONResponse(status_code=400, content={"errors": errors})

            reply = await handler.respond(msg.From.strip(), msg.Body)
            return JSONResponse(
                status_code=200 if reply.ok else 500,
                content={"success": reply.ok, "message": reply.text},
            )

    return app
