"""
CreateTeamHandler.

Handles team creation: team row, owner membership, and moving the owner's
solo licenses into the team.
"""

import logging
from typing import Iterable, Mapping, Optional

from admins.ports.admin_repository import AdminRepository
from core.domain.events import EventBus
from core.domain.exceptions import AdminNotFoundError, AlreadyInTeamError
from core.domain.value_objects import TeamRole
from core.infrastructure.events import event_bus as default_event_bus
from licenses.ports.license_repository import LicenseRepository
from teams.application.commands.create_team import CreateTeamCommand
from teams.application.dto.team_dto import CreateTeamResult
from teams.domain.events import TeamCreated
from teams.domain.member import TeamMember
from teams.domain.services import TeamPolicy
from teams.domain.team import Team
from teams.ports.team_repository import TeamMemberRepository, TeamRepository

logger = logging.getLogger(__name__)


class CreateTeamHandler:
    """Handler for CreateTeamCommand."""

    def __init__(
        self,
        admin_repository: AdminRepository,
        team_repository: TeamRepository,
        member_repository: TeamMemberRepository,
        license_repository: LicenseRepository,
        allowed_domains: Iterable[str],
        domain_labels: Optional[Mapping[str, str]] = None,
        event_bus: Optional[EventBus] = None,
    ):
        """Initialize handler with repositories and team settings."""
        self.admin_repository = admin_repository
        self.team_repository = team_repository
        self.member_repository = member_repository
        self.license_repository = license_repository
        self.allowed_domains = list(allowed_domains)
        self.domain_labels = dict(domain_labels or {})
        self.event_bus = event_bus or default_event_bus

    async def handle(self, command: CreateTeamCommand) -> CreateTeamResult:
        """
        Handle create team command.

        Args:
            command: CreateTeamCommand

        Returns:
            CreateTeamResult with the team and the owner membership

        Raises:
            AdminNotFoundError: If the admin does not exist
            AlreadyInTeamError: If the admin already belongs to a team
            DomainNotAllowedError: If the admin's email domain is not allow-listed
            ValidationError: If the given name is blank or too long
        """
        admin = await self.admin_repository.find_by_id(command.admin_id)
        if admin is None:
            raise AdminNotFoundError(f"Admin {command.admin_id} not found")

        if await self.member_repository.find_by_admin(admin.id):
            raise AlreadyInTeamError()

        domain = TeamPolicy.ensure_domain_allowed(admin.email, self.allowed_domains)
        name = command.name
        if name is None or (isinstance(name, str) and not name.strip()):
            name = TeamPolicy.default_team_name(admin.first_name, admin.email, self.domain_labels)

        team = await self.team_repository.save(
            Team.create(
                name=name,
                domain=domain,
                owner_id=admin.id,
                purchased_license_count=admin.purchased_license_count,
            )
        )

        try:
            owner = await self.member_repository.add(
                TeamMember.create(team_id=team.id, admin_id=admin.id, role=TeamRole.OWNER)
            )
        except Exception:
            logger.warning("Owner membership failed, removing team %s", team.id)
            await self.team_repository.delete(team.id)
            raise

        try:
            relocated = await self.license_repository.reassign_scope(admin.solo_scope, team.scope)
        except Exception:
            logger.warning("License relocation failed, removing team %s", team.id)
            await self.member_repository.delete(owner.id)
            await self.team_repository.delete(team.id)
            raise

        await self.event_bus.publish(
            TeamCreated(
                team_id=team.id,
                owner_id=admin.id,
                name=team.name,
                domain=team.domain,
                relocated_licenses=relocated,
            )
        )

        logger.info(
            "Team created",
            extra={"team_id": str(team.id), "domain": domain, "relocated_licenses": relocated},
        )
        return CreateTeamResult(team=team, owner=owner, relocated_licenses=relocated)
