# tests/test_progress_store.py
import asyncio
import time

import pytest
from sqlalchemy import func, select

from kosync.core.errors import InvalidInput, NotFound
from kosync.models.progress import Progress
from kosync.services import progress_store
from kosync.services.accounts import register_user
from kosync.services.progress_store import get_latest_progress, upsert_progress


@pytest.fixture
async def alice(db, hasher):
    return await register_user(db, hasher, "alice", "secret123")


@pytest.fixture
async def bob(db, hasher):
    return await register_user(db, hasher, "bob", "hunter2")


async def test_upsert_then_latest(db, alice):
    before = int(time.time())
    ts = await upsert_progress(db, alice, "book1", "page42", 37.5, "kobo", "abc")

    record = await get_latest_progress(db, alice, "book1")
    assert record.progress == "page42"
    assert record.percentage == 37.5
    assert record.device == "kobo"
    assert record.device_id == "abc"
    assert record.timestamp == ts
    assert ts >= before


async def test_later_write_wins_even_with_lower_percentage(db, alice):
    await upsert_progress(db, alice, "book1", "page90", 90.0, "kobo", "abc")
    await upsert_progress(db, alice, "book1", "page10", 10.0, "phone", "xyz")

    record = await get_latest_progress(db, alice, "book1")
    assert (record.progress, record.percentage, record.device, record.device_id) == (
        "page10",
        10.0,
        "phone",
        "xyz",
    )


async def test_one_row_per_user_document(db, alice):
    for pct in (1.0, 2.0, 3.0):
        await upsert_progress(db, alice, "book1", f"p{pct}", pct, "kobo", "abc")
    await upsert_progress(db, alice, "book2", "p1", 1.0, "kobo", "abc")

    count = await db.scalar(select(func.count()).select_from(Progress).where(Progress.user_id == alice))
    assert count == 2


async def test_timestamp_comes_from_server_clock(db, alice, monkeypatch):
    monkeypatch.setattr(progress_store.time, "time", lambda: 1700000000.9)
    await upsert_progress(db, alice, "book1", "page1", 1.0, "kobo", "abc")
    monkeypatch.setattr(progress_store.time, "time", lambda: 1600000000.0)
    await upsert_progress(db, alice, "book1", "page2", 2.0, "kobo", "abc")

    record = await get_latest_progress(db, alice, "book1")
    # replaced even though the clock went backwards
    assert record.timestamp == 1600000000
    assert record.progress == "page2"


async def test_other_users_progress_is_invisible(db, alice, bob):
    await upsert_progress(db, alice, "book1", "page42", 37.5, "kobo", "abc")
    with pytest.raises(NotFound):
        await get_latest_progress(db, bob, "book1")


async def test_same_document_is_tracked_per_user(db, alice, bob):
    await upsert_progress(db, alice, "book1", "a", 50.0, "kobo", "abc")
    await upsert_progress(db, bob, "book1", "b", 5.0, "kindle", "def")

    assert (await get_latest_progress(db, alice, "book1")).progress == "a"
    assert (await get_latest_progress(db, bob, "book1")).progress == "b"


async def test_unknown_document_not_found(db, alice):
    with pytest.raises(NotFound):
        await get_latest_progress(db, alice, "never-written")


async def test_percentage_is_not_range_checked(db, alice):
    await upsert_progress(db, alice, "book1", "p", 150.0, "kobo", "abc")
    assert (await get_latest_progress(db, alice, "book1")).percentage == 150.0


@pytest.mark.parametrize(
    "field,value",
    [("document", ""), ("progress", ""), ("percentage", None), ("device", ""), ("device_id", "")],
)
async def test_missing_fields_rejected(db, alice, field, value):
    kwargs = dict(document="book1", progress="p", percentage=1.0, device="kobo", device_id="abc")
    kwargs[field] = value
    with pytest.raises(InvalidInput):
        await upsert_progress(db, alice, **kwargs)

    count = await db.scalar(select(func.count()).select_from(Progress))
    assert count == 0


async def test_latest_reflects_overwrite_within_one_session(db, alice):
    await upsert_progress(db, alice, "book1", "page1", 1.0, "kobo", "abc")
    first = await get_latest_progress(db, alice, "book1")
    assert first.progress == "page1"

    await upsert_progress(db, alice, "book1", "page2", 2.0, "kobo", "abc")
    second = await get_latest_progress(db, alice, "book1")
    assert second.progress == "page2"
    assert second.percentage == 2.0


@pytest.mark.parametrize("percentage", [float("nan"), float("inf"), float("-inf")])
async def test_non_finite_percentage_rejected(db, alice, percentage):
    with pytest.raises(InvalidInput):
        await upsert_progress(db, alice, "book1", "p", percentage, "kobo", "abc")


async def test_concurrent_upserts_leave_one_consistent_row(session_factory, alice):
    writers = [
        (f"page{i}", float(i), f"device{i}", f"id{i}") for i in range(8)
    ]

    async def write(progress, percentage, device, device_id):
        async with session_factory() as session:
            await upsert_progress(session, alice, "book1", progress, percentage, device, device_id)

    await asyncio.gather(*(write(*w) for w in writers))

    async with session_factory() as session:
        rows = (
            await session.execute(select(Progress).where(Progress.user_id == alice, Progress.document == "book1"))
        ).scalars().all()

    assert len(rows) == 1
    row = rows[0]
    # every field comes from the same writer
    assert (row.progress, row.percentage, row.device, row.device_id) in writers
