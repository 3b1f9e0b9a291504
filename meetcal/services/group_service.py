# meetcal/services/group_service.py
"""
Group Service for meetcal

Manages meet groups and their memberships:
- Group creation (group row plus the owner's membership, atomically)
- Listing, joining, leaving and kicking
- Owner-only edits and deletion
- The shared view-authorization check used by group views
"""

from enum import Enum
import logging
from typing import Dict, List, NamedTuple, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.exceptions import (
    AlreadyMemberException,
    DuplicateKeyException,
    ForbiddenException,
    GroupNotFoundException,
    NotFoundException,
    RepositoryException,
    ValidationException,
)
from ..core.timezone_utils import get_user_today
from ..models.meet import MeetGroup
from ..repositories.factory import RepositoryFactory
from ..repositories.group_repository import GroupRepository
from ..repositories.membership_repository import MembershipRepository
from ..repositories.user_repository import UserRepository
from ..utils.week_window import DateLike, parse_calendar_date
from .base import BaseService

logger = logging.getLogger(__name__)

GROUP_NAME_MAX_LENGTH = 100


class GroupDetail(NamedTuple):
    group: MeetGroup
    participates: bool
    member_ids: List[str]
    member_names: Dict[str, str]


def fallback_member_name(user_id: str) -> str:
    """Display name used when a member has no user record."""
    return f"USER_{user_id}"


class ExitResult(str, Enum):
    """Which removal happened in ``exit_or_kick``."""

    EXIT = "exit"
    KICK = "kick"


class GroupService(BaseService):
    """
    Service for meet groups and memberships.

    Check order for every mutating call: the group must exist, then the
    actor must be allowed, then the input must be valid. Nothing is written
    until all three pass.
    """

    def __init__(
        self,
        db: Session,
        group_repository: Optional[GroupRepository] = None,
        membership_repository: Optional[MembershipRepository] = None,
        user_repository: Optional[UserRepository] = None,
    ):
        """Initialize group service with repositories."""
        super().__init__(db)
        self.group_repository = group_repository or RepositoryFactory.create_group_repository(db)
        self.membership_repository = (
            membership_repository or RepositoryFactory.create_membership_repository(db)
        )
        self.user_repository = user_repository or RepositoryFactory.create_user_repository(db)

    @BaseService.measure_operation("create_group")
    def create_group(
        self, owner_id: str, group_name: str, start_date: Optional[DateLike] = None
    ) -> MeetGroup:
        """
        Create a group owned by ``owner_id`` and enrol the owner as its first member.

        Args:
            owner_id: ID of the creating user
            group_name: Display name; surrounding whitespace is stripped
            start_date: Anchor date; defaults to today in the owner's timezone

        Returns:
            The created group

        Raises:
            ValidationException: If the name or date is invalid
        """
        name = self._clean_group_name(group_name)

        with self.transaction():
            if start_date is None:
                anchor = get_user_today(self.user_repository.get_by_id(owner_id))
            else:
                anchor = parse_calendar_date(start_date, field="start_date")

            group = self.group_repository.create(name=name, start_date=anchor, owner_id=owner_id)
            self.membership_repository.add_member(group.id, owner_id)

        self.log_operation("create_group", group_id=group.id, owner_id=owner_id)
        return group

    @BaseService.measure_operation("list_groups_for")
    def list_groups_for(self, user_id: str) -> List[Tuple[MeetGroup, int]]:
        """Groups ``user_id`` belongs to with member counts, newest first."""
        with self.transaction():
            return self.group_repository.list_for_member(user_id)

    @BaseService.measure_operation("join")
    def join(self, group_id: int, user_id: str) -> None:
        """
        Add ``user_id`` to the group.

        Raises:
            GroupNotFoundException: If the group does not exist, including one
                deleted while the join was in flight
            NotFoundException: If the user does not exist
            AlreadyMemberException: If the user is already a member
        """
        with self.transaction():
            self._get_group_or_404(group_id)
            try:
                self.membership_repository.add_member(group_id, user_id)
            except DuplicateKeyException as e:
                raise AlreadyMemberException(group_id, user_id) from e
            except RepositoryException:
                # The insert was rolled back; a vanished row explains a rejected reference
                self._get_group_or_404(group_id)
                if self.user_repository.get_by_id(user_id) is None:
                    raise NotFoundException(
                        "User not found",
                        code="USER_NOT_FOUND",
                        details={"user_id": user_id},
                    )
                raise

        self.log_operation("join", group_id=group_id, user_id=user_id)

    @BaseService.measure_operation("get_detail")
    def get_detail(self, group_id: int, requester_id: str) -> GroupDetail:
        """
        Group metadata, the requester's participation and the members.

        Visible to non-members as well.
        """
        with self.transaction():
            group, participates = self.load_group_for_view(
                group_id, requester_id, members_only=False
            )
            member_ids = self.membership_repository.list_member_ids(group_id)
            names = self.user_repository.get_names(member_ids)

        member_names = {
            user_id: names.get(user_id) or fallback_member_name(user_id) for user_id in member_ids
        }
        return GroupDetail(group, participates, member_ids, member_names)

    @BaseService.measure_operation("update")
    def update(
        self,
        group_id: int,
        requester_id: str,
        group_name: Optional[str] = None,
        start_date: Optional[DateLike] = None,
    ) -> MeetGroup:
        """
        Owner-only edit of name and/or start date. Omitted fields stay as they are.

        Raises:
            GroupNotFoundException: If the group does not exist
            ForbiddenException: If the requester is not the owner
            ValidationException: If a supplied field is invalid
        """
        with self.transaction():
            group = self._get_group_or_404(group_id)
            self._require_owner(group, requester_id)

            changes = {}
            if group_name is not None:
                changes["name"] = self._clean_group_name(group_name)
            if start_date is not None:
                changes["start_date"] = parse_calendar_date(start_date, field="start_date")

            if changes:
                group = self.group_repository.update(group_id, **changes)

        self.log_operation("update_group", group_id=group_id, fields=sorted(changes))
        return group

    @BaseService.measure_operation("remove")
    def remove(self, group_id: int, requester_id: str) -> None:
        """
        Owner-only deletion of a group and all of its memberships.

        Raises:
            GroupNotFoundException: If the group does not exist
            ForbiddenException: If the requester is not the owner
        """
        with self.transaction():
            group = self._get_group_or_404(group_id)
            self._require_owner(group, requester_id)

            removed = self.membership_repository.remove_all_for_group(group_id)
            self.group_repository.delete(group_id)

        self.log_operation("remove_group", group_id=group_id, memberships_removed=removed)

    @BaseService.measure_operation("exit_or_kick")
    def exit_or_kick(self, group_id: int, actor_id: str, target_user_id: str) -> ExitResult:
        """
        Remove ``target_user_id`` from the group.

        A member may remove themselves (exit); the owner may remove anyone
        else (kick). The owner can never be removed this way.

        Raises:
            GroupNotFoundException: If the group does not exist
            ValidationException: If the target is the owner, whoever the actor is
            ForbiddenException: If the actor is neither the target nor the owner
            NotFoundException: If the target is not a member
        """
        with self.transaction():
            group = self._get_group_or_404(group_id)

            # Owner removal is refused whoever asks, ahead of the permission check
            if target_user_id == group.owner_id:
                raise ValidationException(
                    "The group owner cannot leave or be removed; delete the group instead",
                    code="OWNER_CANNOT_LEAVE",
                    details={"group_id": group_id},
                )
            is_self = actor_id == target_user_id
            if not is_self and actor_id != group.owner_id:
                raise ForbiddenException(
                    "Only the group owner can remove other members",
                    code="NOT_GROUP_OWNER",
                    details={"group_id": group_id},
                )

            if not self.membership_repository.remove_member(group_id, target_user_id):
                raise NotFoundException(
                    "User is not a member of this group",
                    code="MEMBERSHIP_NOT_FOUND",
                    details={"group_id": group_id, "user_id": target_user_id},
                )

        result = ExitResult.EXIT if is_self else ExitResult.KICK
        self.log_operation(
            "exit_or_kick", group_id=group_id, user_id=target_user_id, result=result.value
        )
        return result

    def load_group_for_view(
        self, group_id: int, requester_id: str, members_only: bool
    ) -> Tuple[MeetGroup, bool]:
        """
        Load a group for display and decide whether ``requester_id`` may see it.

        Runs in the caller's transaction.

        Returns:
            ``(group, participates)``

        Raises:
            GroupNotFoundException: If the group does not exist
            ForbiddenException: If ``members_only`` and the requester is not a member
        """
        group = self._get_group_or_404(group_id)
        participates = self.membership_repository.is_member(group_id, requester_id)
        if members_only and not participates:
            raise ForbiddenException(
                "Only members can view this group's availability",
                code="NOT_GROUP_MEMBER",
                details={"group_id": group_id},
            )
        return group, participates

    def _get_group_or_404(self, group_id: int) -> MeetGroup:
        group = self.group_repository.get_by_id(group_id)
        if not group:
            raise GroupNotFoundException(group_id)
        return group

    @staticmethod
    def _require_owner(group: MeetGroup, user_id: str) -> None:
        if group.owner_id != user_id:
            raise ForbiddenException(
                "Only the group owner can do this",
                code="NOT_GROUP_OWNER",
                details={"group_id": group.id},
            )

    @staticmethod
    def _clean_group_name(group_name: Optional[str]) -> str:
        name = (group_name or "").strip()
        if not name:
            raise ValidationException("Group name must not be empty", code="INVALID_GROUP_NAME")
        if len(name) > GROUP_NAME_MAX_LENGTH:
            raise ValidationException(
                f"Group name must be at most {GROUP_NAME_MAX_LENGTH} characters",
                code="INVALID_GROUP_NAME",
                details={"length": len(name)},
            )
        return name
