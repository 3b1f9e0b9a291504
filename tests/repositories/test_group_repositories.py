from datetime import date

import pytest

from meetcal.core.exceptions import DuplicateKeyException, RepositoryException
from meetcal.repositories.factory import RepositoryFactory

UNKNOWN_USER_ID = "01JNXXXXXXXXXXXXXXXXXXXXXX"


@pytest.fixture
def repos(db):
    return (
        RepositoryFactory.create_group_repository(db),
        RepositoryFactory.create_membership_repository(db),
        RepositoryFactory.create_user_repository(db),
    )


def _group(db, repos, owner, name="Study"):
    groups, members, _ = repos
    group = groups.create(name=name, start_date=date(2025, 6, 10), owner_id=owner.id)
    members.add_member(group.id, owner.id)
    db.commit()
    return group


def test_group_ids_are_assigned_and_increase(db, repos, make_user):
    owner = make_user()
    first = _group(db, repos, owner, "First")
    second = _group(db, repos, owner, "Second")
    assert first.id is not None
    assert second.id > first.id


def test_list_for_member_orders_newest_first_with_counts(db, repos, make_user):
    groups, members, _ = repos
    owner, other = make_user(), make_user()
    older = _group(db, repos, owner, "Older")
    newer = _group(db, repos, owner, "Newer")
    members.add_member(older.id, other.id)
    db.commit()

    listed = groups.list_for_member(owner.id)
    assert [(g.id, count) for g, count in listed] == [(newer.id, 1), (older.id, 2)]

    # Counts include every member, not only the requesting one
    assert [(g.id, count) for g, count in groups.list_for_member(other.id)] == [(older.id, 2)]


def test_list_for_member_without_groups(repos, make_user):
    groups, _, _ = repos
    assert groups.list_for_member(make_user().id) == []


def test_duplicate_membership_raises_duplicate_key(db, repos, make_user):
    _, members, _ = repos
    owner = make_user()
    group = _group(db, repos, owner)

    with pytest.raises(DuplicateKeyException):
        members.add_member(group.id, owner.id)

    assert members.list_member_ids(group.id) == [owner.id]


def test_membership_for_unknown_user_is_not_a_duplicate(
    enforce_foreign_keys, db, repos, make_user
):
    _, members, _ = repos
    owner = make_user()
    group = _group(db, repos, owner)

    with pytest.raises(RepositoryException) as exc_info:
        members.add_member(group.id, UNKNOWN_USER_ID)

    assert not isinstance(exc_info.value, DuplicateKeyException)
    assert members.list_member_ids(group.id) == [owner.id]


def test_membership_for_missing_group_is_not_a_duplicate(enforce_foreign_keys, repos, make_user):
    _, members, _ = repos

    with pytest.raises(RepositoryException) as exc_info:
        members.add_member(999, make_user().id)

    assert not isinstance(exc_info.value, DuplicateKeyException)


def test_membership_queries(db, repos, make_user):
    _, members, _ = repos
    owner, b, c = make_user(), make_user(), make_user()
    group = _group(db, repos, owner)
    members.add_member(group.id, c.id)
    members.add_member(group.id, b.id)
    db.commit()

    assert members.is_member(group.id, b.id)
    assert members.list_member_ids(group.id) == sorted([owner.id, b.id, c.id])

    assert members.remove_member(group.id, b.id) is True
    assert members.remove_member(group.id, b.id) is False
    db.commit()
    assert not members.is_member(group.id, b.id)

    assert members.remove_all_for_group(group.id) == 2
    db.commit()
    assert members.list_member_ids(group.id) == []


def test_user_names(repos, make_user):
    _, _, users = repos
    ana = make_user(name="Ana")
    assert users.get_names([ana.id, "01JXXXXXXXXXXXXXXXXXXXXXXX"]) == {ana.id: "Ana"}
    assert users.get_names([]) == {}
