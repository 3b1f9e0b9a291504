from __future__ import annotations

from datetime import date, timedelta

from meetcal.database.session_utils import get_dialect_name
from meetcal.repositories.schedule_day_repository import ScheduleDayRepository

SUNDAY = date(2025, 6, 8)
SATURDAY = SUNDAY + timedelta(days=6)


def _stored(repo, user_id, start=SUNDAY, end=SATURDAY):
    return repo.get_range_for_users([user_id], start, end).get(user_id, {})


def test_upsert_week_and_read_back(db, make_user):
    user = make_user()
    repo = ScheduleDayRepository(db)
    bits = b"\x80\x00\x00\x04"

    count = repo.upsert_week(user.id, [(SUNDAY, bits), (SUNDAY + timedelta(days=1), bits)])
    db.commit()
    assert count == 2

    assert _stored(repo, user.id) == {
        SUNDAY: bits,
        SUNDAY + timedelta(days=1): bits,
    }


def test_range_for_user_without_rows(db):
    repo = ScheduleDayRepository(db)
    assert _stored(repo, "01JXXXXXXXXXXXXXXXXXXXXXXX") == {}


def test_upsert_week_updates_existing_rows(db, make_user):
    user = make_user()
    repo = ScheduleDayRepository(db)

    repo.upsert_week(user.id, [(SUNDAY, b"\xff\x00\x00\x00")])
    db.commit()
    repo.upsert_week(user.id, [(SUNDAY, b"\x00\x00\x00\x04")])
    db.commit()

    assert _stored(repo, user.id, SUNDAY, SUNDAY) == {SUNDAY: b"\x00\x00\x00\x04"}


def test_upsert_week_with_no_items_writes_nothing(db, make_user):
    user = make_user()
    repo = ScheduleDayRepository(db)
    assert repo.upsert_week(user.id, []) == 0
    assert _stored(repo, user.id) == {}


def test_get_range_for_users_separates_users_and_respects_bounds(db, make_user):
    alice, bob, carol = make_user(), make_user(), make_user()
    repo = ScheduleDayRepository(db)
    repo.upsert_week(
        alice.id,
        [(SUNDAY, b"\x80\x00\x00\x00"), (SUNDAY - timedelta(days=1), b"\xff\xff\xff\xfc")],
    )
    repo.upsert_week(bob.id, [(SUNDAY + timedelta(days=6), b"\x01\x00\x00\x00")])
    db.commit()

    result = repo.get_range_for_users(
        [alice.id, bob.id, carol.id], SUNDAY, SUNDAY + timedelta(days=6)
    )

    assert result == {
        alice.id: {SUNDAY: b"\x80\x00\x00\x00"},
        bob.id: {SUNDAY + timedelta(days=6): b"\x01\x00\x00\x00"},
    }


def test_get_range_for_users_with_no_ids(db):
    assert ScheduleDayRepository(db).get_range_for_users([], SUNDAY, SUNDAY) == {}


def test_orm_fallback_upsert(db, make_user, monkeypatch):
    user = make_user()
    repo = ScheduleDayRepository(db)
    monkeypatch.setattr(
        "meetcal.repositories.schedule_day_repository.get_dialect_name",
        lambda session: "mysql",
    )

    repo.upsert_week(user.id, [(SUNDAY, b"\x80\x00\x00\x00")])
    db.commit()
    repo.upsert_week(
        user.id,
        [(SUNDAY, b"\x40\x00\x00\x00"), (SUNDAY + timedelta(days=2), b"\x20\x00\x00\x00")],
    )
    db.commit()

    assert _stored(repo, user.id) == {
        SUNDAY: b"\x40\x00\x00\x00",
        SUNDAY + timedelta(days=2): b"\x20\x00\x00\x00",
    }


def test_dialect_name_of_test_session(db):
    assert get_dialect_name(db) == "sqlite"
