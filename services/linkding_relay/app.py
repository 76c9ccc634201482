import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from starlette.requests import Request

from services.linkding_relay.config import RelaySettings
from services.linkding_relay.errors import RelayError
from services.linkding_relay.middleware import TraceMiddleware
from services.linkding_relay.routes import router
from services.linkding_relay.slack import SlackNotifier
from services.shared.logging import log_event, log_exception

logger = logging.getLogger(__name__)


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    context = {"path": request.url.path, "status": exc.status_code}
    if exc.status_code >= 500:
        log_exception(logger, "webhook_relay_failed", exc, context=context)
    else:
        logger.warning("webhook_rejected", extra={**context, "reason": str(exc)})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


def create_app(settings: RelaySettings, notifier: SlackNotifier | None = None) -> FastAPI:
    if notifier is None:
        notifier = SlackNotifier(settings.slack_webhook_url, timeout=settings.slack_timeout)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        log_event(
            logger,
            "relay_started",
            port=settings.port,
            webhook_endpoint="/webhook/linkding",
            test_endpoint="/test-slack",
            secret_required=settings.webhook_secret is not None,
        )
        if notifier.is_configured:
            logger.info("slack_webhook_configured")
        else:
            log_event(logger, "slack_webhook_not_configured", level="WARNING", env="SLACK_WEBHOOK_URL")
        yield
        logger.info("relay_stopped")

    app = FastAPI(title="Linkding Slack Relay", version="1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.notifier = notifier

    app.add_middleware(TraceMiddleware)
    app.add_exception_handler(RelayError, relay_error_handler)
    app.include_router(router)
    return app
