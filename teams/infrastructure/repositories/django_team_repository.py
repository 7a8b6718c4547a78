"""
Django implementation of TeamRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import uuid
from typing import Optional

from asgiref.sync import sync_to_async

from teams.domain.team import Team
from teams.infrastructure.models import Team as TeamModel
from teams.ports.team_repository import TeamRepository


class DjangoTeamRepository(TeamRepository):
    """Django ORM implementation of TeamRepository."""

    def _to_domain(self, model: TeamModel) -> Team:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Team model

        Returns:
            Team domain entity
        """
        return Team(
            id=model.id,
            name=model.name,
            domain=model.domain,
            owner_id=model.owner_id,
            purchased_license_count=model.purchased_license_count,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def save(self, team: Team) -> Team:
        """
        Save a team entity.

        The purchased count is only written on insert; purchases change it
        through the quota repository.
        """
        model, created = TeamModel.objects.get_or_create(
            id=team.id,
            defaults={
                "name": team.name,
                "domain": team.domain,
                "owner_id": team.owner_id,
                "purchased_license_count": team.purchased_license_count,
                "created_at": team.created_at,
                "updated_at": team.updated_at,
            },
        )
        if not created:
            model.name = team.name
            model.updated_at = team.updated_at
            model.save(update_fields=["name", "updated_at"])
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, team_id: uuid.UUID) -> Optional[Team]:
        try:
            return self._to_domain(TeamModel.objects.get(id=team_id))
        except TeamModel.DoesNotExist:
            return None

    @sync_to_async
    def delete(self, team_id: uuid.UUID) -> None:
        TeamModel.objects.filter(id=team_id).delete()
