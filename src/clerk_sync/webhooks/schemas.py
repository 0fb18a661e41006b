from typing import Any, Literal

from pydantic import BaseModel

from clerk_sync.users import UserRecord


class ClerkEmailAddress(BaseModel):
    email_address: str


class ClerkUserData(BaseModel):
    id: str
    username: str | None = None
    email_addresses: list[ClerkEmailAddress]
    first_name: str | None = None
    last_name: str | None = None
    image_url: str | None = None

    def to_record(self) -> UserRecord:
        # Only the first email address is kept.
        email = self.email_addresses[0].email_address if self.email_addresses else None
        return UserRecord(
            id=self.id,
            email_address=email or None,
            username=self.username or None,
            first_name=self.first_name or None,
            last_name=self.last_name or None,
            profile_image_url=self.image_url or None,
        )


class DeletedObjectData(BaseModel):
    # Clerk only sends a stub for deleted users.
    id: str
    object: str | None = None
    deleted: bool | None = None


class WebhookEnvelope(BaseModel):
    type: str
    data: dict[str, Any]


class UserCreated(BaseModel):
    type: Literal["user.created"] = "user.created"
    user: ClerkUserData


class UserUpdated(BaseModel):
    type: Literal["user.updated"] = "user.updated"
    user: ClerkUserData


class UserDeleted(BaseModel):
    type: Literal["user.deleted"] = "user.deleted"
    user: DeletedObjectData


class UnhandledEvent(BaseModel):
    type: str


WebhookEvent = UserCreated | UserUpdated | UserDeleted | UnhandledEvent
