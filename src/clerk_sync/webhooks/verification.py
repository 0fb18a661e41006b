import json
import logging
from typing import Any

from starlette.datastructures import Headers
from svix.webhooks import Webhook, WebhookVerificationError

from .errors import (
    ConfigurationError,
    InvalidEventError,
    InvalidSignatureError,
    MissingHeadersError,
)

logger = logging.getLogger(__name__)

SVIX_HEADERS = ("svix-id", "svix-timestamp", "svix-signature")


def load_webhook(secret: str | None) -> Webhook:
    if not secret:
        logger.error("CLERK_WEBHOOK_SIGNING_SECRET is not set")
        raise ConfigurationError()
    try:
        return Webhook(secret)
    except ValueError as e:
        # svix base64 decodes the secret, a bad one fails here.
        logger.error("CLERK_WEBHOOK_SIGNING_SECRET is not a valid secret: %s", e)
        raise ConfigurationError() from e


def svix_headers(headers: Headers) -> dict[str, str]:
    """
    Pulls out the three headers svix signs with.
    Raises MissingHeadersError if any of them isn't there.
    """
    svix = {name: headers.get(name) for name in SVIX_HEADERS}
    missing = [name for name, value in svix.items() if not value]
    if missing:
        logger.warning("Webhook missing headers: %s", ", ".join(missing))
        raise MissingHeadersError()
    return {name: value for name, value in svix.items() if value is not None}


def verify_payload(webhook: Webhook, payload: bytes, headers: dict[str, str]) -> Any:
    """
    Checks the signature over the raw body and returns the decoded json.
    The body is not parsed at all unless the signature matches.
    """
    try:
        webhook.verify(payload, headers)
    except WebhookVerificationError as e:
        logger.warning("Webhook verification failed: %s", e)
        raise InvalidSignatureError() from e
    # Newer svix only checks the signature, decoding is up to us.
    try:
        return json.loads(payload)
    except ValueError as e:
        # Signed, but not json.
        logger.warning("Webhook payload is not valid json: %s", e)
        raise InvalidEventError() from e
