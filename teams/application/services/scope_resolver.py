"""
Scope resolution service.

An admin acts for its team when it has a membership, otherwise for itself.
"""

import uuid

from core.domain.value_objects import Scope, SoloScope, TeamScope
from teams.ports.team_repository import TeamMemberRepository


class ScopeResolver:
    """Resolves the organization scope an admin acts in."""

    def __init__(self, member_repository: TeamMemberRepository):
        self.member_repository = member_repository

    async def resolve(self, admin_id: uuid.UUID) -> Scope:
        """
        Resolve the scope of an admin.

        Args:
            admin_id: Admin UUID

        Returns:
            TeamScope for team members, SoloScope otherwise
        """
        member = await self.member_repository.find_by_admin(admin_id)
        if member is None:
            return SoloScope(admin_id)
        return TeamScope(member.team_id)
