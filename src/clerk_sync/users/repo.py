from typing import Any

from databases import Database
from sentry_sdk.tracing import trace
from sqlalchemy.dialects import postgresql, sqlite

from .schemas import UserRecord
from . import tables


# Dialects that have insert ... on conflict do update.
UPSERT_DIALECTS: dict[str, Any] = {
    "postgresql": postgresql.insert,
    "postgres": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _upsert_user(database: Database, user: UserRecord) -> Any:
    insert = UPSERT_DIALECTS.get(database.url.dialect)
    if insert is None:
        raise ValueError(f"upsert not supported for {database.url.dialect}")

    query = insert(tables.users).values(**user.model_dump())
    return query.on_conflict_do_update(
        index_elements=[tables.users.c.id],
        set_={
            column.name: query.excluded[column.name]
            for column in tables.users.columns
            if not column.primary_key
        },
    )


@trace
async def create_user(database: Database, user: UserRecord) -> None:
    """
    Inserts the user, or overwrites it if one with that id is already there.
    Clerk redelivers webhooks, so a second user.created for the same id
    has to land on the same row instead of failing.
    """
    await database.execute(query=_upsert_user(database, user))


@trace
async def update_user(database: Database, user: UserRecord) -> None:
    # Updating a user we don't have is fine, nothing happens.
    await database.execute(
        query=tables.users.update()
        .where(tables.users.c.id == user.id)
        .values(**user.model_dump(exclude={"id"}))
    )


@trace
async def delete_user(database: Database, user_id: str) -> None:
    await database.execute(
        query=tables.users.delete().where(tables.users.c.id == user_id)
    )


@trace
async def get_user_by_id(database: Database, user_id: str) -> UserRecord | None:
    user = await database.fetch_one(
        query=tables.users.select().where(tables.users.c.id == user_id)
    )
    if user is None:
        return None
    return UserRecord(
        id=user["id"],
        email_address=user["email_address"],
        username=user["username"],
        first_name=user["first_name"],
        last_name=user["last_name"],
        profile_image_url=user["profile_image_url"],
    )
