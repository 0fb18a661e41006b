from . import tables
from .repo import create_user, delete_user, get_user_by_id, update_user
from .schemas import UserRecord

__all__ = [
    "tables",
    "UserRecord",
    "create_user",
    "delete_user",
    "get_user_by_id",
    "update_user",
]
