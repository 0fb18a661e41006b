from pydantic import BaseModel

# Users live in Clerk, this is our copy of them.
# Every field except the id gets overwritten on each update.


class UserRecord(BaseModel):
    id: str
    email_address: str | None
    username: str | None
    first_name: str | None
    last_name: str | None
    profile_image_url: str | None
