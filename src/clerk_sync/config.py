import os

from pydantic import BaseModel, field_validator

from clerk_sync.users.repo import UPSERT_DIALECTS


class Settings(BaseModel):
    database_url: str
    # Optional at startup, a request without it fails with a 400.
    webhook_secret: str | None = None
    sentry_dsn: str | None = None
    sentry_environment: str | None = None
    sentry_traces_sample_rate: float = 1.0
    log_level: str = "INFO"

    @field_validator("database_url")
    @classmethod
    def check_dialect(cls, database_url: str) -> str:
        # postgresql+asyncpg://... -> postgresql
        dialect = database_url.split(":", 1)[0].split("+", 1)[0]
        if dialect not in UPSERT_DIALECTS:
            raise ValueError(f"unsupported database {dialect}")
        return database_url

    @classmethod
    def from_env(cls) -> "Settings":
        database_url = os.environ.get("DATABASE_URL")
        if database_url is None:
            database_url = os.environ.get("TEST_DATABASE_URL")
        assert database_url is not None
        return cls(
            database_url=database_url,
            webhook_secret=os.environ.get("CLERK_WEBHOOK_SIGNING_SECRET") or None,
            sentry_dsn=os.environ.get("SENTRY_DSN"),
            sentry_environment=os.environ.get("SENTRY_ENVIRONMENT"),
            sentry_traces_sample_rate=float(
                os.environ.get("SENTRY_TRACES_SAMPLE_RATE", "1.0")
            ),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
        )
