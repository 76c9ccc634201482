from __future__ import annotations

from dataclasses import dataclass

from services.shared.config import float_env, int_env, optional_env, optional_secret

# Default value of SLACK_WEBHOOK_URL; delivery is disabled while it is in place.
SLACK_WEBHOOK_PLACEHOLDER = "YOUR_SLACK_WEBHOOK_URL_HERE"


@dataclass(frozen=True)
class RelaySettings:
    """Static configuration, built once at process entry."""

    port: int = 3000
    host: str = "0.0.0.0"
    slack_webhook_url: str = SLACK_WEBHOOK_PLACEHOLDER
    webhook_secret: str | None = None
    slack_timeout: float = 10.0
    log_level: str = "INFO"
    service_name: str = "linkding-relay"

    @classmethod
    def from_env(cls) -> "RelaySettings":
        return cls(
            port=int_env("PORT", 3000),
            host=optional_env("HOST", "0.0.0.0"),
            slack_webhook_url=optional_env("SLACK_WEBHOOK_URL", SLACK_WEBHOOK_PLACEHOLDER),
            webhook_secret=optional_secret("WEBHOOK_SECRET"),
            slack_timeout=float_env("SLACK_TIMEOUT_SECONDS", 10.0),
            log_level=optional_env("LOG_LEVEL", "INFO").upper(),
            service_name=optional_env("SERVICE_NAME", "linkding-relay"),
        )
