import threading
from datetime import datetime, timedelta, timezone

import pytest

from app.infrastructure.persistence.memory.otp_repository_memory import InMemoryOtpRepository
from app.infrastructure.persistence.memory.user_repository_memory import InMemoryUserRepository

NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_user_create_defaults_and_lookup():
    repo = InMemoryUserRepository()
    user = repo.create(name="Asha", phone="5551234567", flat="1", floor="0", block="A", role="resident")
    assert user.is_verified is False
    assert repo.get_by_id(user.id) == user
    assert repo.get_by_phone("5551234567") == user
    assert repo.get_by_phone("0000000000") is None


def test_user_phone_is_unique():
    repo = InMemoryUserRepository()
    repo.create(name="Asha", phone="5551234567", flat="1", floor="0", block="A", role="resident")
    with pytest.raises(ValueError):
        repo.create(name="Other", phone="5551234567", flat="2", floor="0", block="A", role="resident")


def test_user_update_is_partial_and_keeps_identity():
    repo = InMemoryUserRepository()
    user = repo.create(name="Asha", phone="5551234567", flat="1", floor="0", block="A", role="resident")
    updated = repo.update(user.id, is_verified=True, id="hijack", created_at=NOW)
    assert updated.id == user.id
    assert updated.created_at == user.created_at
    assert updated.is_verified is True
    assert updated.name == "Asha"
    assert repo.update("missing", is_verified=True) is None


def test_returned_records_are_copies():
    repo = InMemoryUserRepository()
    user = repo.create(name="Asha", phone="5551234567", flat="1", floor="0", block="A", role="resident")
    user.name = "Changed"
    assert repo.get_by_id(user.id).name == "Asha"


def test_otp_get_valid_filters_used_and_expired():
    repo = InMemoryOtpRepository()
    live = repo.create("5551234567", "111111", NOW + timedelta(minutes=5))
    repo.create("5551234567", "222222", NOW - timedelta(seconds=1))

    assert repo.get_valid("5551234567", "111111", NOW).id == live.id
    assert repo.get_valid("5551234567", "222222", NOW) is None
    assert repo.get_valid("5550000000", "111111", NOW) is None

    assert repo.mark_used(live.id) is True
    assert repo.get_valid("5551234567", "111111", NOW) is None


def test_otp_mark_used_only_succeeds_once():
    repo = InMemoryOtpRepository()
    rec = repo.create("5551234567", "111111", NOW + timedelta(minutes=5))
    assert repo.mark_used(rec.id) is True
    assert repo.mark_used(rec.id) is False
    assert repo.mark_used("unknown") is False


def test_otp_mark_used_is_at_most_once_across_threads():
    repo = InMemoryOtpRepository()
    rec = repo.create("5551234567", "111111", NOW + timedelta(minutes=5))
    results = []

    def consume():
        results.append(repo.mark_used(rec.id))

    threads = [threading.Thread(target=consume) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 1


def test_otp_purge_expired():
    repo = InMemoryOtpRepository()
    repo.create("5551234567", "111111", NOW - timedelta(minutes=1))
    repo.create("5551234567", "222222", NOW)
    keep = repo.create("5551234567", "333333", NOW + timedelta(minutes=1))
    assert repo.purge_expired(NOW) == 2
    assert repo.get_valid("5551234567", "333333", NOW).id == keep.id
