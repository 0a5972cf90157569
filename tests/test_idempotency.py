from datetime import datetime, timedelta, timezone

import pytest

from ledgerkit.idempotency import IdempotencyRecord, IdempotencyStatus, IdempotencyStore


class DictStore(IdempotencyStore):
    def __init__(self):
        self.records = {}

    async def try_acquire(self, key, ttl_secs):
        if key in self.records:
            return self.records[key]
        now = datetime.now(timezone.utc)
        self.records[key] = IdempotencyRecord(key, now, now + timedelta(seconds=ttl_secs))
        return None

    async def complete(self, key, response):
        self.records[key].status = IdempotencyStatus.COMPLETED
        self.records[key].response = response

    async def fail(self, key):
        self.records[key].status = IdempotencyStatus.FAILED

    async def get(self, key):
        return self.records.get(key)

    async def remove(self, key):
        self.records.pop(key, None)


def test_store_is_abstract():
    with pytest.raises(TypeError):
        IdempotencyStore()


def test_store_missing_method_cannot_be_created():
    assert {"try_acquire", "complete", "fail", "get", "remove"} <= set(
        IdempotencyStore.__abstractmethods__
    )
    with pytest.raises(TypeError):
        IdempotencyStore()

    class Partial(IdempotencyStore):
        async def try_acquire(self, key, ttl_secs):
            return None

        async def complete(self, key, response):
            return None

        async def fail(self, key):
            return None

        async def get(self, key):
            return None

    with pytest.raises(TypeError):
        Partial()


@pytest.mark.asyncio
async def test_complete_store_round_trip():
    store = DictStore()
    assert await store.try_acquire("k1", 60) is None
    existing = await store.try_acquire("k1", 60)
    assert isinstance(existing, IdempotencyRecord)
    assert existing.key == "k1"
    assert existing.status is IdempotencyStatus.IN_PROGRESS
    assert existing.expires_at - existing.created_at == timedelta(seconds=60)

    await store.complete("k1", {"event_id": "e1"})
    record = await store.get("k1")
    expected = IdempotencyRecord(
        key="k1",
        created_at=existing.created_at,
        expires_at=existing.expires_at,
        response={"event_id": "e1"},
        status=IdempotencyStatus("completed"),
    )
    assert record == expected
    assert record.status is IdempotencyStatus.COMPLETED
    assert record.response == {"event_id": "e1"}

    await store.remove("k1")
    assert await store.get("k1") is None


def test_record_defaults():
    now = datetime.now(timezone.utc)
    record = IdempotencyRecord("k1", now, now + timedelta(seconds=60))
    assert record.status is IdempotencyStatus.IN_PROGRESS
    assert record.response is None
    assert record.expires_at - record.created_at == timedelta(seconds=60)


def test_status_wire_value():
    assert IdempotencyStatus.IN_PROGRESS.value == "in_progress"
    for status in IdempotencyStatus:
        assert IdempotencyStatus(status.value) is status