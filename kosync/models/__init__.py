from kosync.models.user import User
from kosync.models.progress import Progress

__all__ = ["User", "Progress"]
