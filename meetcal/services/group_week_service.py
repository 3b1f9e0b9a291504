# meetcal/services/group_week_service.py
"""
Group week aggregation for meetcal.

Builds the weekly availability of every member of a group for one shared
Sunday-aligned window, so a client can overlay them and spot common free
slots.
"""

from datetime import date
import logging
from typing import List, NamedTuple, Optional

from sqlalchemy.orm import Session

from ..models.meet import MeetGroup
from ..repositories.factory import RepositoryFactory
from ..repositories.membership_repository import MembershipRepository
from ..repositories.user_repository import UserRepository
from ..utils.week_window import DateLike, WeekWindow, parse_calendar_date, window_for
from .base import BaseService
from .group_service import GroupService, fallback_member_name
from .schedule_service import DaySlots, ScheduleService

logger = logging.getLogger(__name__)


class MemberWeek(NamedTuple):
    user_id: str
    name: str
    # None when the viewer may not see availability
    days: Optional[List[DaySlots]]


class GroupWeekView(NamedTuple):
    group: MeetGroup
    week_start: date
    members: List[MemberWeek]


class GroupPage(NamedTuple):
    """Everything the group detail page shows, read in one transaction."""

    group: MeetGroup
    participates: bool
    week_start: Optional[date]
    members: List[MemberWeek]


class GroupWeekService(BaseService):
    """Read-only aggregation of member schedules for a group."""

    def __init__(
        self,
        db: Session,
        group_service: Optional[GroupService] = None,
        schedule_service: Optional[ScheduleService] = None,
        membership_repository: Optional[MembershipRepository] = None,
        user_repository: Optional[UserRepository] = None,
    ):
        super().__init__(db)
        self.group_service = group_service or GroupService(db)
        self.schedule_service = schedule_service or ScheduleService(db)
        self.membership_repository = (
            membership_repository or RepositoryFactory.create_membership_repository(db)
        )
        self.user_repository = user_repository or RepositoryFactory.create_user_repository(db)

    @BaseService.measure_operation("get_group_week")
    def get_group_week(
        self, group_id: int, requester_id: str, reference_date: Optional[DateLike] = None
    ) -> GroupWeekView:
        """
        Weekly availability of every member of ``group_id``.

        Args:
            group_id: Group to aggregate
            requester_id: Must be a member of the group
            reference_date: Any date in the wanted week; defaults to the group's start date

        Returns:
            GroupWeekView with members ordered by ascending user id

        Raises:
            GroupNotFoundException: If the group does not exist
            ForbiddenException: If the requester is not a member
            ValidationException: If ``reference_date`` is not a calendar date
        """
        with self.transaction():
            group, _ = self.group_service.load_group_for_view(
                group_id, requester_id, members_only=True
            )
            window = self._window(group, reference_date)
            members = self._members(group_id, window)

        return GroupWeekView(group, window.start_date, members)

    @BaseService.measure_operation("get_group_page")
    def get_group_page(
        self, group_id: int, requester_id: str, reference_date: Optional[DateLike] = None
    ) -> GroupPage:
        """
        Group detail for any signed-in user, with availability for members.

        Membership and availability come from the same transaction, so the
        page never mixes a member view with a non-member one. A malformed
        ``reference_date`` is rejected for every requester.

        Raises:
            GroupNotFoundException: If the group does not exist
            ValidationException: If ``reference_date`` is not a calendar date
        """
        with self.transaction():
            group, participates = self.group_service.load_group_for_view(
                group_id, requester_id, members_only=False
            )
            window = self._window(group, reference_date)
            if not participates:
                return GroupPage(group, False, None, self._members(group_id, None))
            members = self._members(group_id, window)

        return GroupPage(group, True, window.start_date, members)

    @staticmethod
    def _window(group: MeetGroup, reference_date: Optional[DateLike]) -> WeekWindow:
        if reference_date is None:
            return window_for(group.start_date)
        return window_for(parse_calendar_date(reference_date, field="day"))

    def _members(self, group_id: int, window: Optional[WeekWindow]) -> List[MemberWeek]:
        """Members by ascending user id; their weeks only when ``window`` is given."""
        member_ids = self.membership_repository.list_member_ids(group_id)
        names = self.user_repository.get_names(member_ids)
        weeks = (
            self.schedule_service.get_weeks_for_users(member_ids, window)
            if window is not None
            else {}
        )
        return [
            MemberWeek(
                user_id=user_id,
                name=names.get(user_id) or fallback_member_name(user_id),
                days=weeks[user_id].days if window is not None else None,
            )
            for user_id in member_ids
        ]
