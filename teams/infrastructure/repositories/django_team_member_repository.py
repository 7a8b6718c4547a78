"""
Django implementation of TeamMemberRepository port.
"""

import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.domain.exceptions import AlreadyInTeamError
from core.domain.value_objects import TeamRole
from teams.domain.member import TeamMember
from teams.infrastructure.models import TeamMember as TeamMemberModel
from teams.ports.team_repository import TeamMemberRepository

_ROLE_ORDER = {TeamRole.OWNER: 0, TeamRole.ADMIN: 1, TeamRole.MEMBER: 2}


class DjangoTeamMemberRepository(TeamMemberRepository):
    """Django ORM implementation of TeamMemberRepository."""

    def _to_domain(self, model: TeamMemberModel, with_admin: bool = False) -> TeamMember:
        email = None
        full_name = ""
        if with_admin:
            admin = model.admin
            email = admin.email
            full_name = f"{admin.first_name} {admin.last_name}".strip()
        return TeamMember(
            id=model.id,
            team_id=model.team_id,
            admin_id=model.admin_id,
            role=TeamRole(model.role),
            joined_at=model.joined_at,
            email=email,
            full_name=full_name,
        )

    @sync_to_async
    def add(self, member: TeamMember) -> TeamMember:
        try:
            with transaction.atomic():
                model = TeamMemberModel.objects.create(
                    id=member.id,
                    team_id=member.team_id,
                    admin_id=member.admin_id,
                    role=member.role.value,
                    joined_at=member.joined_at,
                )
        except IntegrityError as e:
            raise AlreadyInTeamError() from e
        return self._to_domain(model)

    @sync_to_async
    def save(self, member: TeamMember) -> TeamMember:
        TeamMemberModel.objects.filter(id=member.id).update(role=member.role.value)
        return member

    @sync_to_async
    def find_by_id(self, member_id: uuid.UUID) -> Optional[TeamMember]:
        model = TeamMemberModel.objects.select_related("admin").filter(id=member_id).first()
        return self._to_domain(model, with_admin=True) if model else None

    @sync_to_async
    def find_by_admin(self, admin_id: uuid.UUID) -> Optional[TeamMember]:
        model = TeamMemberModel.objects.filter(admin_id=admin_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_by_team(self, team_id: uuid.UUID) -> List[TeamMember]:
        models = TeamMemberModel.objects.select_related("admin").filter(team_id=team_id)
        members = [self._to_domain(model, with_admin=True) for model in models]
        return sorted(members, key=lambda m: (_ROLE_ORDER[m.role], m.joined_at))

    @sync_to_async
    def delete(self, member_id: uuid.UUID) -> None:
        TeamMemberModel.objects.filter(id=member_id).delete()
