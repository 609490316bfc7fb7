from kosync.schemas.progress import ProgressOutSchema, ProgressUpdateSchema, StatusSchema
from kosync.schemas.user import UserCreateSchema

__all__ = [
    "ProgressOutSchema",
    "ProgressUpdateSchema",
    "StatusSchema",
    "UserCreateSchema",
]
