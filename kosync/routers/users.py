"""User routes: registration and credential check."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from kosync.core.deps import CurrentUserId, get_password_hasher
from kosync.core.security import PasswordHasher
from kosync.db.session import get_db
from kosync.schemas.progress import StatusSchema
from kosync.schemas.user import UserCreateSchema
from kosync.services.accounts import register_user

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/create", status_code=201, response_model=StatusSchema)
async def create_user(
    body: UserCreateSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
):
    """Register a new username; 409 if it is taken."""
    await register_user(db, hasher, body.username, body.password)
    return {"status": "success"}


@router.get("/auth", response_model=StatusSchema)
async def auth_user(user_id: CurrentUserId):
    """Lets a device check its credentials before syncing."""
    return {"status": "authenticated"}
