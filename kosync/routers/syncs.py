"""Sync routes: push and fetch reading progress for the authenticated user."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from kosync.core.deps import CurrentUserId
from kosync.db.session import get_db
from kosync.schemas.progress import ProgressOutSchema, ProgressUpdateSchema, StatusSchema
from kosync.services.progress_store import get_latest_progress, upsert_progress

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/syncs", tags=["syncs"])


@router.put("/progress", response_model=StatusSchema)
async def update_progress(
    request: Request,
    body: ProgressUpdateSchema,
    user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Replace the stored position for ``body.document`` with this one."""
    timestamp = await upsert_progress(
        db,
        user_id,
        document=body.document,
        progress=body.progress,
        percentage=body.percentage,
        device=body.device,
        device_id=body.device_id,
    )
    logger.info(
        "Progress updated at %d",
        timestamp,
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "user_id": user_id,
            "document": body.document,
            "device": body.device,
        },
    )
    return {"status": "success"}


@router.get("/progress/{document}", response_model=ProgressOutSchema)
async def get_progress(
    document: str,
    user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Latest position for one of the caller's documents."""
    return await get_latest_progress(db, user_id, document)
