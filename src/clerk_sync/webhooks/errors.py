from fastapi import status


class WebhookError(Exception):
    """
    Base for everything that stops a webhook from being processed.
    Each kind knows the status and the message the caller gets back,
    the underlying cause is only logged.
    """

    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Webhook error"


class ConfigurationError(WebhookError):
    message = "Webhook error: server misconfigured"


class MissingHeadersError(WebhookError):
    message = "Missing Svix headers"


class InvalidSignatureError(WebhookError):
    message = "Invalid webhook signature"


class InvalidEventError(WebhookError):
    message = "Webhook error: invalid event payload"


class PersistenceError(WebhookError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Database error"
