import logging
from typing import Any, Callable

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from clerk_sync.config import Settings


def webhook_sampler(sample_rate: float) -> Callable[[dict[str, Any]], float]:
    """
    Health checks are never traced. Anything continuing a trace keeps the
    upstream decision, the rest is sampled at sample_rate.
    """

    def sampler(ctx: dict[str, Any]) -> float:
        path = ctx.get("asgi_scope", {}).get("path") or ""
        if path.startswith("/health"):
            return 0.0
        parent_sampled = ctx.get("parent_sampled")
        if parent_sampled is not None:
            return 1.0 if parent_sampled else 0.0
        return sample_rate

    return sampler


def setup_tracing(settings: Settings) -> None:
    if settings.sentry_dsn is None or settings.sentry_environment is None:
        return
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.sentry_environment,
        traces_sampler=webhook_sampler(settings.sentry_traces_sample_rate),
        # Verification and database failures are logged at error level,
        # those become Sentry events.
        integrations=[
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)
        ],
    )
