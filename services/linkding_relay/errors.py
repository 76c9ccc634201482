"""
Relay error hierarchy.

Each error carries the HTTP status it maps to and the message that is safe
to return to the caller. The full detail stays in str(exc) for the logs.
"""

from __future__ import annotations


class RelayError(Exception):
    status_code = 500
    public_message = "Internal server error"
    metric_result = "failed"


class AuthorizationError(RelayError):
    status_code = 401
    public_message = "Invalid webhook secret"
    metric_result = "unauthorized"


class ValidationError(RelayError):
    status_code = 400
    public_message = "Invalid bookmark data"
    metric_result = "invalid"


class ConfigurationError(RelayError):
    pass


class DeliveryError(RelayError):
    """Slack rejected the message or could not be reached."""

    def __init__(self, status_code: int | None, status_text: str):
        self.response_status = status_code
        self.status_text = status_text
        if status_code is None:
            super().__init__(f"Slack request failed: {status_text}")
        else:
            super().__init__(f"Slack API error: {status_code} {status_text}")
