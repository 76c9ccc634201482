import hmac

from services.linkding_relay.errors import AuthorizationError


def check_webhook_secret(expected: str | None, provided: str | None) -> None:
    """Raise AuthorizationError unless `provided` matches the configured secret.

    With no secret configured every request passes.
    """
    if not expected:
        return
    if provided is None or not hmac.compare_digest(
        provided.encode("utf-8"), expected.encode("utf-8")
    ):
        raise AuthorizationError("Webhook secret missing or mismatched")
