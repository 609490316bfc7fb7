"""Account registration and credential verification."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from kosync.core.errors import AlreadyExists, InvalidInput, Unauthenticated
from kosync.core.security import PasswordHasher
from kosync.models.user import User

logger = logging.getLogger(__name__)


async def register_user(
    db: AsyncSession,
    hasher: PasswordHasher,
    username: str,
    password: str,
) -> int:
    """Create an account and return its id.

    Uniqueness is left to the unique index on ``users.username``; two
    concurrent registrations of the same name cannot both succeed.
    """
    if not username or not password:
        raise InvalidInput("Username and password are required")

    # bcrypt is CPU bound, keep it off the event loop
    hashed = await run_in_threadpool(hasher.hash, password)
    user = User(username=username, password=hashed)
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info("Registration rejected: username taken", extra={"username": username})
        raise AlreadyExists()

    logger.info("User registered", extra={"username": username, "user_id": user.id})
    return user.id


async def verify_credentials(
    db: AsyncSession,
    hasher: PasswordHasher,
    username: str | None,
    password: str | None,
) -> int:
    """Return the user id for valid credentials, raise ``Unauthenticated`` otherwise.

    Unknown usernames and wrong passwords fail identically; an unknown name
    still pays for one hash verification.
    """
    if not username or not password:
        raise Unauthenticated("Authentication required")

    result = await db.execute(select(User.id, User.password).where(User.username == username))
    row = result.one_or_none()

    if row is None:
        await run_in_threadpool(hasher.dummy_verify)
        raise Unauthenticated()

    if not await run_in_threadpool(hasher.verify, password, row.password):
        raise Unauthenticated()

    return row.id
