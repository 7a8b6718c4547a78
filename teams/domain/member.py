"""
TeamMember domain entity.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.exceptions import CannotDemoteOwnerError, InvalidRoleError
from core.domain.value_objects import TeamRole


def parse_assignable_role(raw) -> TeamRole:
    """
    Parse a role that may be given to an invitee or existing member.

    Args:
        raw: Role string or TeamRole

    Returns:
        TeamRole.ADMIN or TeamRole.MEMBER

    Raises:
        InvalidRoleError: For unknown roles and for ``owner``
    """
    try:
        role = raw if isinstance(raw, TeamRole) else TeamRole(str(raw).strip().lower())
    except ValueError as e:
        raise InvalidRoleError(f"Invalid role: {raw}") from e
    if role is TeamRole.OWNER:
        raise InvalidRoleError("The owner role cannot be assigned")
    return role


@dataclass(frozen=True)
class TeamMember:
    """
    Membership of an admin in a team.

    ``email`` and ``full_name`` are read-side details of the admin and are
    not persisted on the membership.
    """

    id: uuid.UUID
    team_id: uuid.UUID
    admin_id: uuid.UUID
    role: TeamRole
    joined_at: datetime
    email: Optional[str] = None
    full_name: str = ""

    @classmethod
    def create(
        cls,
        team_id: uuid.UUID,
        admin_id: uuid.UUID,
        role: TeamRole,
        member_id: Optional[uuid.UUID] = None,
    ) -> "TeamMember":
        return cls(
            id=member_id or uuid.uuid4(),
            team_id=team_id,
            admin_id=admin_id,
            role=role,
            joined_at=datetime.now(timezone.utc),
        )

    @property
    def is_owner(self) -> bool:
        return self.role is TeamRole.OWNER

    def change_role(self, new_role: TeamRole) -> "TeamMember":
        """
        Give the member a new role.

        Raises:
            CannotDemoteOwnerError: If this is the owner row
            InvalidRoleError: If the new role is owner
        """
        if self.is_owner:
            raise CannotDemoteOwnerError()
        return replace(self, role=parse_assignable_role(new_role))
