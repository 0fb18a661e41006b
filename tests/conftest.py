import base64
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, AsyncIterator, Callable

import databases
import pytest
import sqlalchemy
from httpx import ASGITransport, AsyncClient
from svix.webhooks import Webhook

from clerk_sync.config import Settings
from clerk_sync.users import tables
from clerk_sync.web.app import build_app

WEBHOOK_SECRET = "whsec_" + base64.b64encode(b"clerk-sync-test-secret").decode()

SignedRequest = tuple[bytes, dict[str, str]]


@pytest.fixture(autouse=True)
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'test.db'}"


# NOTE: No migrations, the tables come straight from the metadata.
@pytest.fixture
async def database(database_url: str) -> AsyncIterator[databases.Database]:
    engine = sqlalchemy.create_engine(database_url)
    tables.metadata.create_all(engine)
    engine.dispose()

    database = databases.Database(database_url)
    await database.connect()
    assert database.is_connected
    yield database
    await database.disconnect()
    assert not database.is_connected
    return


@pytest.fixture
def settings(database_url: str) -> Settings:
    return Settings(database_url=database_url, webhook_secret=WEBHOOK_SECRET)


@pytest.fixture
async def api(
    database: databases.Database, settings: Settings
) -> AsyncIterator[AsyncClient]:
    app = build_app(database, settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as api:
        yield api
    return


@pytest.fixture
def sign() -> Callable[..., SignedRequest]:
    """
    Signs an event the way Clerk does, returns the body and svix headers.
    """

    def _sign(
        event: dict[str, Any] | str,
        msg_id: str = "msg_1",
        timestamp: datetime | None = None,
    ) -> SignedRequest:
        body = event if isinstance(event, str) else json.dumps(event)
        if timestamp is None:
            timestamp = datetime.now(tz=timezone.utc)
        signature = Webhook(WEBHOOK_SECRET).sign(msg_id, timestamp, body)
        headers = {
            "svix-id": msg_id,
            "svix-timestamp": str(int(timestamp.timestamp())),
            "svix-signature": signature,
            "content-type": "application/json",
        }
        return body.encode(), headers

    return _sign


@pytest.fixture
def user_event() -> Callable[..., dict[str, Any]]:
    def _user_event(
        event_type: str, user_id: str = "user_steve", **data: Any
    ) -> dict[str, Any]:
        user: dict[str, Any] = {
            "id": user_id,
            "username": "steve",
            "email_addresses": [
                {"id": "idn_1", "email_address": "steve@steve.computer"},
                {"id": "idn_2", "email_address": "other@steve.computer"},
            ],
            "first_name": "Steve",
            "last_name": "Olsen",
            "image_url": "https://example.com/steve.jpg",
        }
        user.update(data)
        return {"type": event_type, "object": "event", "data": user}

    return _user_event


@pytest.fixture
def webhook_secret() -> str:
    return WEBHOOK_SECRET
