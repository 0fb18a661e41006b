import logging
from typing import Any

from databases import Database
from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse

from clerk_sync.config import Settings
from clerk_sync.webhooks import WebhookError, handle_webhook

from .tracing import setup_tracing

logger = logging.getLogger(__name__)


def build_app(database: Database, settings: Settings) -> FastAPI:
    app = FastAPI()

    @app.exception_handler(WebhookError)
    async def webhook_error(request: Request, exc: WebhookError) -> Response:
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.get("/health")
    async def check_health(request: Request) -> Any:
        return Response(status_code=200)

    @app.post("/api/webhooks", response_class=PlainTextResponse)
    async def receive_webhook(request: Request) -> Any:
        try:
            await handle_webhook(database, settings.webhook_secret, request)
        except WebhookError:
            raise
        except Exception as e:
            # Anything else still gets a response, the cause stays in the logs.
            logger.exception("Webhook handler error")
            raise WebhookError() from e
        return "Webhook processed"

    @app.on_event("startup")
    async def startup() -> None:
        await database.connect()
        setup_tracing(settings)
        logger.info("Connected to %s", database.url.dialect)

    @app.on_event("shutdown")
    async def shutdown() -> None:
        await database.disconnect()

    return app
