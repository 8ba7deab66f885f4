"""GitHub webhook routes."""

from fastapi import APIRouter, Request

from relaybot.core.logging import get_logger
from relaybot.services.github.schemas import WebhookResponse
from relaybot.services.github.service import WebhookRelay

logger = get_logger("github.routes")

WEBHOOK_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_router(path: str) -> APIRouter:
    """Build the webhook router mounted at the configured path."""
    router = APIRouter()

    @router.api_route(path, methods=WEBHOOK_METHODS, response_model=WebhookResponse)
    async def github_webhook(request: Request) -> WebhookResponse:
        """Handle GitHub webhook events."""
        event = request.headers.get("X-GitHub-Event")
        signature = request.headers.get("X-Hub-Signature")
        delivery_id = request.headers.get("X-GitHub-Delivery")

        logger.info(f"Webhook received: event={event}, delivery={delivery_id}")

        # The signature covers the raw bytes, so read them before anything parses JSON
        body = await request.body()

        relay: WebhookRelay = request.app.state.relay
        notification = await relay.handle(event, signature, body)

        if notification is None:
            return WebhookResponse(message="Event ignored", event=event)
        return WebhookResponse(message="Notification queued", event=event)

    return router
