"""Tests for the SQLModel repository."""

import asyncio
import threading
import time
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import event

from lost_and_found.domain.models.claim import Claim, ClaimStatus
from lost_and_found.domain.models.found_item import FoundItemStatus
from lost_and_found.domain.models.lost_item import LostItemStatus
from lost_and_found.domain.services.lost_and_found_service import LostAndFoundService
from lost_and_found.infrastructure.storage.sqlmodel_repository import SQLModelItemRepository


@pytest.mark.asyncio
async def test_lost_item_round_trip(sql_repository, make_lost_item):
    """Test storing and fetching a lost item report."""
    report = make_lost_item(
        lost_time_from=datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc),
        lost_time_to=datetime(2024, 1, 1, 18, 0, tzinfo=timezone.utc),
        brand_model="Jansport",
        secret_info_1="blue42",
        secret_info_2="room9",
    )

    stored = await sql_repository.add_lost_item(report)
    fetched = await sql_repository.get_lost_item(stored.id)

    assert stored.id is not None
    assert fetched.item_type == "backpack"
    assert fetched.brand_model == "Jansport"
    assert fetched.status == LostItemStatus.OPEN
    assert fetched.lost_time_from == report.lost_time_from
    assert fetched.secret_info_1 == "blue42"


@pytest.mark.asyncio
async def test_offsets_are_stored_as_utc(sql_repository, make_found_item):
    """Test that aware timestamps keep their instant."""
    found_time = datetime(2024, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    stored = await sql_repository.add_found_item(make_found_item(found_time=found_time))

    assert stored.found_time == found_time
    assert stored.found_time.tzinfo == timezone.utc


@pytest.mark.asyncio
async def test_secrets_query(sql_repository, make_lost_item):
    """Test fetching only the verification pair."""
    stored = await sql_repository.add_lost_item(make_lost_item(secret_info_1="blue42"))

    secrets = await sql_repository.get_lost_item_secrets(stored.id)

    assert secrets.secret_info_1 == "blue42"
    assert secrets.secret_info_2 is None
    assert await sql_repository.get_lost_item_secrets(stored.id + 1) is None


@pytest.mark.asyncio
async def test_listings_drop_secrets(sql_repository, make_lost_item):
    """Test that listed reports carry no secrets at all."""
    await sql_repository.add_lost_item(make_lost_item(secret_info_1="a", secret_info_2="b"))

    reports = await sql_repository.list_lost_items()

    assert len(reports) == 1
    assert reports[0].secret_info_1 is None
    assert reports[0].secret_info_2 is None


@pytest.mark.asyncio
async def test_list_lost_items_by_reporter(sql_repository, make_lost_item):
    """Test reporter filter and newest-first order."""
    old = await sql_repository.add_lost_item(
        make_lost_item(reporter_id=1, created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
    )
    new = await sql_repository.add_lost_item(
        make_lost_item(reporter_id=1, created_at=datetime(2024, 3, 1, tzinfo=timezone.utc))
    )
    await sql_repository.add_lost_item(make_lost_item(reporter_id=2))

    reports = await sql_repository.list_lost_items(reporter_id=1)

    assert [r.id for r in reports] == [new.id, old.id]


@pytest.mark.asyncio
async def test_available_found_items(sql_repository, make_found_item):
    """Test status filtering in logging order."""
    a = await sql_repository.add_found_item(make_found_item())
    await sql_repository.add_found_item(make_found_item(status=FoundItemStatus.CLAIMED))
    c = await sql_repository.add_found_item(make_found_item(photo_url="uploads/c.webp"))

    items = await sql_repository.list_available_found_items()

    assert [item.id for item in items] == [a.id, c.id]
    assert items[1].photo_url == "uploads/c.webp"


@pytest.mark.asyncio
async def test_claims(sql_repository, make_lost_item, make_found_item):
    """Test storing and fetching a claim."""
    lost = await sql_repository.add_lost_item(make_lost_item())
    found = await sql_repository.add_found_item(make_found_item())

    stored = await sql_repository.add_claim(Claim(
        lost_item_id=lost.id,
        found_item_id=found.id,
        claimer_id=3,
        verification_input_1="guess",
        status=ClaimStatus.PENDING,
    ))
    fetched = await sql_repository.get_claim(stored.id)

    assert fetched.status == ClaimStatus.PENDING
    assert fetched.verification_input_1 == "guess"
    assert fetched.lost_item_id == lost.id


@pytest.mark.asyncio
async def test_end_to_end_with_service(sql_repository, make_lost_item, make_found_item):
    """Test the matching flow against the relational store."""
    service = LostAndFoundService(sql_repository)
    lost = await service.report_lost_item(make_lost_item(
        lost_time_from=datetime(2024, 1, 1, 8, 0),
        lost_time_to=datetime(2024, 1, 1, 18, 0),
    ))
    await service.log_found_item(make_found_item(item_type="wallet"))
    backpack = await service.log_found_item(make_found_item())

    matches = await service.find_matches_for(lost.id)

    assert [(m.found_item.id, m.score) for m in matches] == [(backpack.id, 100)]


@pytest.mark.asyncio
async def test_ping_and_lifecycle():
    """Test connectivity check and shutdown."""
    repository = SQLModelItemRepository(database_url="sqlite://")
    assert not repository.is_available

    await repository.initialize()
    assert repository.is_available
    assert await repository.ping()

    await repository.shutdown()
    assert not repository.is_available

    with pytest.raises(RuntimeError):
        await repository.ping()


@pytest.mark.asyncio
async def test_naive_and_offset_timestamps_are_stored(sql_repository, make_lost_item, make_found_item):
    """Test inserting naive and offset timestamps side by side."""
    naive = await sql_repository.add_found_item(make_found_item(found_time=datetime(2024, 1, 1, 12, 0)))
    offset = await sql_repository.add_found_item(
        make_found_item(found_time=datetime(2024, 1, 1, 7, 0, tzinfo=timezone(timedelta(hours=-5))))
    )
    report = await sql_repository.add_lost_item(make_lost_item(
        lost_time_from=datetime(2024, 1, 1, 8, 0),
        lost_time_to=datetime(2024, 1, 1, 13, 0, tzinfo=timezone(timedelta(hours=1))),
    ))

    items = await sql_repository.list_available_found_items()
    fetched = await sql_repository.get_lost_item(report.id)

    assert [item.id for item in items] == [naive.id, offset.id]
    assert items[0].found_time == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert items[1].found_time == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert fetched.lost_time_from == datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)
    assert fetched.lost_time_to == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_queries_run_off_the_event_loop(sql_repository, make_lost_item):
    """Test that session work happens in a worker thread."""
    query_threads = []

    def record_thread(*args):
        query_threads.append(threading.get_ident())

    event.listen(sql_repository._engine, "before_cursor_execute", record_thread)
    try:
        await sql_repository.ping()
        await sql_repository.add_lost_item(make_lost_item())
        await sql_repository.list_lost_items()
    finally:
        event.remove(sql_repository._engine, "before_cursor_execute", record_thread)

    assert query_threads
    assert threading.get_ident() not in query_threads


@pytest.mark.asyncio
async def test_slow_query_does_not_stall_the_loop(sql_repository):
    """Test that other tasks keep running while a query blocks."""
    def slow_query(*args):
        time.sleep(0.3)

    ticks = []

    async def ticker():
        for _ in range(10):
            ticks.append(time.monotonic())
            await asyncio.sleep(0.05)

    event.listen(sql_repository._engine, "before_cursor_execute", slow_query)
    try:
        await asyncio.gather(sql_repository.ping(), ticker())
    finally:
        event.remove(sql_repository._engine, "before_cursor_execute", slow_query)

    gaps = [later - earlier for earlier, later in zip(ticks, ticks[1:])]
    assert max(gaps) < 0.25
