import logging
from typing import Any, assert_never

from databases import Database
from pydantic import ValidationError
from sentry_sdk.tracing import trace
from starlette.requests import Request

from clerk_sync import users

from .errors import InvalidEventError, PersistenceError
from .schemas import (
    ClerkUserData,
    DeletedObjectData,
    UnhandledEvent,
    UserCreated,
    UserDeleted,
    UserUpdated,
    WebhookEnvelope,
    WebhookEvent,
)
from .verification import load_webhook, svix_headers, verify_payload

logger = logging.getLogger(__name__)


def decode_event(payload: Any) -> WebhookEvent:
    """
    Decodes in two steps, the envelope to get the type, then the data
    for that type. Types we don't handle never get their data looked at.
    """
    try:
        envelope = WebhookEnvelope.model_validate(payload)
        match envelope.type:
            case "user.created":
                return UserCreated(user=ClerkUserData.model_validate(envelope.data))
            case "user.updated":
                return UserUpdated(user=ClerkUserData.model_validate(envelope.data))
            case "user.deleted":
                return UserDeleted(
                    user=DeletedObjectData.model_validate(envelope.data)
                )
            case _:
                return UnhandledEvent(type=envelope.type)
    except ValidationError as e:
        logger.warning("Webhook payload doesn't match its event type: %s", e)
        raise InvalidEventError() from e


@trace
async def apply_event(database: Database, event: WebhookEvent) -> None:
    """
    Applies at most one change to the users table for the event.
    Any database failure comes back out as a PersistenceError.
    """
    try:
        match event:
            case UserCreated(user=user):
                await users.create_user(database, user.to_record())
                logger.info("User created: %s", user.id)
            case UserUpdated(user=user):
                await users.update_user(database, user.to_record())
                logger.info("User updated: %s", user.id)
            case UserDeleted(user=user):
                await users.delete_user(database, user.id)
                logger.info("User deleted: %s", user.id)
            case UnhandledEvent(type=event_type):
                logger.info("Unhandled event type: %s", event_type)
            case _event as unreachable:
                assert_never(unreachable)
    except Exception as e:
        logger.exception("%s failed", event.type)
        raise PersistenceError() from e


async def handle_webhook(
    database: Database, secret: str | None, request: Request
) -> WebhookEvent:
    webhook = load_webhook(secret)
    svix = svix_headers(request.headers)
    # Signature is over the exact bytes, so the raw body, not parsed json.
    body = await request.body()
    payload = verify_payload(webhook, body, svix)
    event = decode_event(payload)
    await apply_event(database, event)
    return event
