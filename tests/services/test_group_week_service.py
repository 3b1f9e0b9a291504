from datetime import date, timedelta

import pytest

from meetcal.core.exceptions import ForbiddenException, GroupNotFoundException, ValidationException
from meetcal.models import GroupMember
from meetcal.services.group_service import GroupService
from meetcal.services.group_week_service import GroupWeekService
from meetcal.services.schedule_service import ScheduleService
from meetcal.utils.bitset import SLOTS_PER_DAY, empty_slots

SUNDAY = date(2025, 6, 8)
MORNING = [True] * 5 + [False] * (SLOTS_PER_DAY - 5)


def _week(start, slots):
    return [(start + timedelta(days=i), list(slots)) for i in range(7)]


@pytest.fixture
def groups(db):
    return GroupService(db)


@pytest.fixture
def schedules(db):
    return ScheduleService(db)


@pytest.fixture
def service(db):
    return GroupWeekService(db)


def test_two_members_one_saved_one_empty(service, groups, schedules, make_user):
    member1 = make_user(name="One")
    member2 = make_user(name="Two")
    group = groups.create_group(member1.id, "Study", date(2025, 6, 11))
    groups.join(group.id, member2.id)

    schedules.save_week(member1.id, SUNDAY, _week(SUNDAY, MORNING))

    view = service.get_group_week(group.id, member2.id, "2025-06-12")

    assert view.week_start == SUNDAY
    by_id = {m.user_id: m for m in view.members}
    assert [d for d, _ in by_id[member1.id].days] == [SUNDAY + timedelta(days=i) for i in range(7)]
    assert [d for d, _ in by_id[member2.id].days] == [d for d, _ in by_id[member1.id].days]
    assert all(slots == MORNING for _, slots in by_id[member1.id].days)
    assert all(slots == empty_slots() for _, slots in by_id[member2.id].days)
    assert by_id[member1.id].name == "One"


def test_reference_date_defaults_to_group_start(service, groups, schedules, make_user):
    owner = make_user()
    group = groups.create_group(owner.id, "Study", date(2025, 6, 18))
    schedules.save_week(owner.id, date(2025, 6, 15), _week(date(2025, 6, 15), MORNING))

    view = service.get_group_week(group.id, owner.id)

    assert view.week_start == date(2025, 6, 15)
    assert all(slots == MORNING for _, slots in view.members[0].days)


def test_members_are_ordered_by_user_id(service, groups, make_user):
    users = [make_user() for _ in range(4)]
    group = groups.create_group(users[2].id, "Crowd", SUNDAY)
    for user in users:
        if user is not users[2]:
            groups.join(group.id, user.id)

    view = service.get_group_week(group.id, users[0].id)

    assert [m.user_id for m in view.members] == sorted(u.id for u in users)


def test_unknown_member_gets_fallback_name(service, groups, make_user, db):
    owner = make_user()
    group = groups.create_group(owner.id, "Study", SUNDAY)
    ghost_id = "01JGHOSTGHOSTGHOSTGHOSTGHO"
    db.add(GroupMember(group_id=group.id, user_id=ghost_id))
    db.commit()

    view = service.get_group_week(group.id, owner.id)

    names = {m.user_id: m.name for m in view.members}
    assert names[ghost_id] == f"USER_{ghost_id}"


def test_non_member_is_forbidden(service, groups, make_user):
    owner = make_user()
    group = groups.create_group(owner.id, "Private", SUNDAY)
    with pytest.raises(ForbiddenException):
        service.get_group_week(group.id, make_user().id)


def test_missing_group(service, make_user):
    with pytest.raises(GroupNotFoundException):
        service.get_group_week(404, make_user().id)


def test_bad_reference_date(service, groups, make_user):
    owner = make_user()
    group = groups.create_group(owner.id, "Study", SUNDAY)
    with pytest.raises(ValidationException):
        service.get_group_week(group.id, owner.id, "06/12/2025")


class TestGroupPage:
    def test_member_page_carries_the_week(self, service, groups, schedules, make_user):
        owner = make_user(name="Owner")
        group = groups.create_group(owner.id, "Study", date(2025, 6, 11))
        schedules.save_week(owner.id, SUNDAY, _week(SUNDAY, MORNING))

        page = service.get_group_page(group.id, owner.id)

        assert page.participates is True
        assert page.week_start == SUNDAY
        assert [m.name for m in page.members] == ["Owner"]
        assert all(slots == MORNING for _, slots in page.members[0].days)

    def test_non_member_page_lists_members_without_days(self, service, groups, make_user):
        owner = make_user(name="Owner")
        group = groups.create_group(owner.id, "Study", SUNDAY)

        page = service.get_group_page(group.id, make_user().id, "2025-06-12")

        assert page.participates is False
        assert page.week_start is None
        assert [(m.user_id, m.name, m.days) for m in page.members] == [(owner.id, "Owner", None)]

    def test_removed_member_sees_non_member_page(self, service, groups, make_user):
        owner, member = make_user(), make_user()
        group = groups.create_group(owner.id, "Study", SUNDAY)
        groups.join(group.id, member.id)
        groups.exit_or_kick(group.id, owner.id, member.id)

        page = service.get_group_page(group.id, member.id)

        assert page.participates is False
        assert [m.user_id for m in page.members] == [owner.id]

    def test_bad_reference_date_rejected_for_non_member(self, service, groups, make_user):
        owner = make_user()
        group = groups.create_group(owner.id, "Study", SUNDAY)
        with pytest.raises(ValidationException):
            service.get_group_page(group.id, make_user().id, "2025-13-01")

    def test_missing_group(self, service, make_user):
        with pytest.raises(GroupNotFoundException):
            service.get_group_page(404, make_user().id)
