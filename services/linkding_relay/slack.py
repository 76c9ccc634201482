"""
Slack notifier: renders bookmarks as Block Kit messages and posts them to an
incoming-webhook URL.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

from services.linkding_relay.config import SLACK_WEBHOOK_PLACEHOLDER
from services.linkding_relay.errors import ConfigurationError, DeliveryError
from services.linkding_relay.normalizer import Bookmark
from services.shared.http_client import traced_client
from services.shared.metrics import slack_deliveries_total

logger = logging.getLogger(__name__)

SAVED_AT_FORMAT = "%b %d, %Y %I:%M %p"

TEST_MESSAGE: dict[str, Any] = {
    "text": "🧪 Test message from Linkding webhook service",
    "blocks": [
        {
            "type": "section",
            "text": {
                "type": "mrkdwn",
                "text": "🧪 *Test Message*\nYour Linkding to Slack webhook service is working correctly!",
            },
        }
    ],
}


def escape_mrkdwn(text: str) -> str:
    """Escape the three characters Slack treats as control sequences."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def link_target(url: str) -> str:
    """Escape a url for use inside `<url|text>`; a literal `|` would end the target."""
    return escape_mrkdwn(url).replace("|", "%7C")


def format_saved_at(value: str) -> str:
    """Render an ISO-8601 timestamp for humans; anything unparseable is shown as-is."""
    try:
        saved = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return value
    rendered = saved.strftime(SAVED_AT_FORMAT)
    tz_name = saved.tzname()
    return f"{rendered} {tz_name}" if tz_name else rendered


def _mrkdwn_section(text: str) -> dict:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def format_bookmark_message(bookmark: Bookmark) -> dict:
    blocks: list[dict] = [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": "📌 New Bookmark Saved"},
        },
        _mrkdwn_section(f"*<{link_target(bookmark.url)}|{escape_mrkdwn(bookmark.title)}>*"),
    ]

    if bookmark.description:
        blocks.append(
            _mrkdwn_section(f"📝 *Description:* {escape_mrkdwn(bookmark.description)}")
        )

    if bookmark.tags:
        tags = ", ".join(escape_mrkdwn(tag) for tag in bookmark.tags)
        blocks.append(_mrkdwn_section(f"🏷️ *Tags:* {tags}"))

    blocks.append(
        {
            "type": "context",
            "elements": [
                {"type": "mrkdwn", "text": f"⏰ Saved: {format_saved_at(bookmark.date_added)}"}
            ],
        }
    )

    return {"text": "📌 New bookmark saved", "blocks": blocks}


class SlackNotifier:
    """Posts rendered messages to one Slack incoming webhook. No retries."""

    def __init__(self, webhook_url: str | None, timeout: float = 10.0, client_factory=traced_client):
        self.webhook_url = webhook_url or ""
        self.timeout = timeout
        self._client_factory = client_factory

    @property
    def is_configured(self) -> bool:
        return bool(self.webhook_url) and self.webhook_url != SLACK_WEBHOOK_PLACEHOLDER

    async def send(self, message: dict) -> None:
        if not self.is_configured:
            slack_deliveries_total.labels(outcome="unconfigured").inc()
            raise ConfigurationError("Slack webhook URL not configured")

        try:
            async with self._client_factory(timeout=self.timeout) as client:
                response = await client.post(self.webhook_url, json=message)
        except httpx.HTTPError as exc:
            slack_deliveries_total.labels(outcome="transport_error").inc()
            raise DeliveryError(None, f"{type(exc).__name__}: {exc}") from exc

        if response.status_code != 200:
            slack_deliveries_total.labels(outcome="rejected").inc()
            raise DeliveryError(response.status_code, response.reason_phrase)

        slack_deliveries_total.labels(outcome="delivered").inc()
        logger.info("slack_message_delivered", extra={"status_code": response.status_code})

    async def send_bookmark(self, bookmark: Bookmark) -> None:
        await self.send(format_bookmark_message(bookmark))

    async def send_test_message(self) -> None:
        await self.send(TEST_MESSAGE)
