"""SQLAlchemy declarative base and model imports for Alembic."""
from kosync.db.session import Base

# Import all models so Alembic can see them
from kosync.models.progress import Progress  # noqa: F401
from kosync.models.user import User  # noqa: F401

__all__ = ["Base", "User", "Progress"]
