from .errors import (
    ConfigurationError,
    InvalidEventError,
    InvalidSignatureError,
    MissingHeadersError,
    PersistenceError,
    WebhookError,
)
from .schemas import WebhookEvent
from .service import apply_event, decode_event, handle_webhook

__all__ = [
    "ConfigurationError",
    "InvalidEventError",
    "InvalidSignatureError",
    "MissingHeadersError",
    "PersistenceError",
    "WebhookError",
    "WebhookEvent",
    "apply_event",
    "decode_event",
    "handle_webhook",
]
