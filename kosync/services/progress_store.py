"""Latest reading position per (user, document), last write wins.

An update replaces the stored record unconditionally: a device reporting a
lower percentage overwrites a higher one from another device. Records are
never merged and no history is kept.
"""
import math
import time

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from kosync.core.errors import ConfigurationError, InvalidInput, NotFound
from kosync.models.progress import Progress

UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def check_dialect(name: str) -> None:
    """Fail at startup for databases without an atomic upsert statement."""
    if name not in UPSERT_DIALECTS:
        supported = ", ".join(sorted(UPSERT_DIALECTS))
        raise ConfigurationError(f"unsupported database {name!r}, expected one of: {supported}")


async def upsert_progress(
    db: AsyncSession,
    user_id: int,
    document: str,
    progress: str,
    percentage: float,
    device: str,
    device_id: str,
) -> int:
    """Store the position for (user_id, document) and return the server timestamp."""
    if not document or not progress or not device or not device_id:
        raise InvalidInput()
    # NaN and infinity do not survive a round trip through the database
    if percentage is None or not math.isfinite(percentage):
        raise InvalidInput("percentage must be a finite number")

    timestamp = int(time.time())
    values = {
        "user_id": user_id,
        "document": document,
        "progress": progress,
        "percentage": percentage,
        "device": device,
        "device_id": device_id,
        "timestamp": timestamp,
    }

    insert = UPSERT_DIALECTS[db.get_bind().dialect.name]
    stmt = insert(Progress).values(**values)
    # single statement: the row is replaced as a whole or not at all
    stmt = stmt.on_conflict_do_update(
        index_elements=[Progress.user_id, Progress.document],
        set_={
            "progress": stmt.excluded.progress,
            "percentage": stmt.excluded.percentage,
            "device": stmt.excluded.device,
            "device_id": stmt.excluded.device_id,
            "timestamp": stmt.excluded.timestamp,
        },
    )
    await db.execute(stmt)
    await db.commit()
    return timestamp


async def get_latest_progress(db: AsyncSession, user_id: int, document: str) -> Progress:
    """Return the current record for the caller's own document or raise ``NotFound``."""
    stmt = select(Progress).where(Progress.user_id == user_id, Progress.document == document)
    # the upsert bypasses the identity map, so reload any cached instance
    result = await db.execute(stmt.execution_options(populate_existing=True))
    record = result.scalar_one_or_none()
    if record is None:
        raise NotFound("Progress not found")
    return record
