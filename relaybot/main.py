"""GitHub to IRC relay - FastAPI entry point."""

import sys
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from relaybot.config import Settings, get_settings
from relaybot.core.exceptions import ApiException
from relaybot.core.logging import configure_logging, get_logger
from relaybot.core.schemas.responses import ErrorResponse, HealthResponse
from relaybot.services.github.routes import create_router
from relaybot.services.github.service import WebhookRelay
from relaybot.services.irc.formatting import DEFAULT_THEME, PLAIN_THEME
from relaybot.services.irc.queue import NotificationQueue
from relaybot.services.irc.session import ChatSession, Connector
from relaybot.services.shortener.client import LinkShortener

logger = get_logger("main")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run the IRC session alongside the HTTP server."""
    session: ChatSession = app.state.session
    session.start()
    try:
        yield
    finally:
        logger.info("Shutting down IRC session")
        await session.stop()


async def api_exception_handler(request: Request, exc: ApiException) -> JSONResponse:
    """Handle custom API exceptions and return structured error response."""
    logger.warning(f"API error: {exc.message} (status={exc.status_code})")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.message,
            details=exc.details if exc.details else None,
        ).model_dump(),
    )


def create_app(
    settings: Optional[Settings] = None,
    connector: Optional[Connector] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """Wire the relay pipeline into a FastAPI application."""
    settings = settings or get_settings()

    queue = NotificationQueue(settings.queue_capacity)
    theme = DEFAULT_THEME if settings.colors_enabled else PLAIN_THEME
    shortener = LinkShortener(settings, client=http_client)

    app = FastAPI(
        title="relaybot",
        description="Relays GitHub webhooks to IRC channels",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.queue = queue
    app.state.session = ChatSession(settings, queue, connector=connector)
    app.state.relay = WebhookRelay(settings, queue, shortener, theme)

    app.add_exception_handler(ApiException, api_exception_handler)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            chat_state=app.state.session.state.value,
            queued=queue.qsize(),
        )

    # Include routes
    app.include_router(create_router(settings.webhook_path))

    return app


def run() -> None:
    """Load configuration and serve until interrupted."""
    import uvicorn

    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(settings)

    logger.info(f"Starting relaybot on {settings.host}:{settings.port}")
    uvicorn.run(
        "relaybot.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
