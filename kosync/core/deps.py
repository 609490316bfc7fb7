"""Shared FastAPI dependencies: settings, hasher, and the credential header gate."""
import logging
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from kosync.core.config import Settings
from kosync.core.errors import Unauthenticated
from kosync.core.security import PasswordHasher
from kosync.db.session import get_db
from kosync.services.accounts import verify_credentials

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


async def get_current_user_id(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    x_auth_user: Annotated[str | None, Header()] = None,
    x_auth_key: Annotated[str | None, Header()] = None,
) -> int:
    """Authenticate the request from x-auth-user / x-auth-key.

    Runs on every protected request; nothing is remembered between requests.
    """
    request_id = getattr(request.state, "request_id", None)
    request.state.username = x_auth_user

    logger.debug("Authentication attempt", extra={"request_id": request_id, "username": x_auth_user})
    try:
        user_id = await verify_credentials(db, hasher, x_auth_user, x_auth_key)
    except Unauthenticated as exc:
        logger.warning(
            "Authentication failed: %s",
            exc.message,
            extra={"request_id": request_id, "username": x_auth_user},
        )
        # same body for every cause
        raise Unauthenticated()

    request.state.user_id = user_id
    logger.info(
        "Authentication successful",
        extra={"request_id": request_id, "username": x_auth_user, "user_id": user_id},
    )
    return user_id


CurrentUserId = Annotated[int, Depends(get_current_user_id)]
