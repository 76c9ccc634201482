import logging

from fastapi import APIRouter, Header, Query
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.requests import Request
from starlette.responses import Response

from services.linkding_relay.errors import RelayError, ValidationError
from services.linkding_relay.gate import check_webhook_secret
from services.linkding_relay.normalizer import extract_bookmark
from services.shared.logging import log_exception
from services.shared.metrics import webhooks_received_total

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_json(request: Request):
    try:
        return await request.json()
    except (ValueError, RecursionError) as exc:
        raise ValidationError("Request body is not valid JSON") from exc


@router.get("/")
async def health():
    return {
        "status": "running",
        "message": "Linkding to Slack webhook service is active",
    }


@router.get("/metrics")
async def metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@router.post("/webhook/linkding")
async def linkding_webhook(
    request: Request,
    secret: str | None = Query(default=None),
    x_webhook_secret: str | None = Header(default=None),
):
    """Receive a Linkding bookmark webhook and relay it to Slack."""
    settings = request.app.state.settings
    notifier = request.app.state.notifier
    try:
        check_webhook_secret(settings.webhook_secret, x_webhook_secret or secret)
        payload = await _read_json(request)
        logger.debug("linkding_webhook_received", extra={"payload": payload})

        bookmark = extract_bookmark(payload)
        if bookmark is None:
            raise ValidationError("No bookmark with a url found in webhook payload")

        await notifier.send_bookmark(bookmark)
    except RelayError as exc:
        webhooks_received_total.labels(result=exc.metric_result).inc()
        raise
    except Exception as exc:
        webhooks_received_total.labels(result="failed").inc()
        raise RelayError("Unexpected failure while relaying bookmark") from exc

    webhooks_received_total.labels(result="relayed").inc()
    logger.info("bookmark_relayed", extra={"url": bookmark.url, "tags": list(bookmark.tags)})
    return {"success": True, "message": "Bookmark sent to Slack"}


@router.post("/test-slack")
async def test_slack(request: Request):
    """Send a fixed message so an operator can verify the Slack integration."""
    try:
        await request.app.state.notifier.send_test_message()
    except RelayError as exc:
        log_exception(logger, "slack_test_failed", exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})
    return {"success": True, "message": "Test message sent to Slack"}
