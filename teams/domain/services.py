"""
Team domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

from typing import Iterable, Mapping, Optional

from core.domain.exceptions import DomainNotAllowedError, ForbiddenError
from core.domain.value_objects import Email, TeamRole
from teams.domain.member import TeamMember


class TeamPolicy:
    """Domain service for team creation and permission rules."""

    @staticmethod
    def ensure_domain_allowed(email: Email, allowed_domains: Iterable[str]) -> str:
        """
        Check that an email domain may create teams.

        Args:
            email: Owner email
            allowed_domains: Allow-listed domains

        Returns:
            The email's domain

        Raises:
            DomainNotAllowedError: If the domain is not allow-listed
        """
        domain = email.domain
        if domain not in {d.strip().lower() for d in allowed_domains}:
            raise DomainNotAllowedError(
                f"Team creation is not available for the {domain} domain"
            )
        return domain

    @staticmethod
    def domain_label(domain: str, labels: Optional[Mapping[str, str]] = None) -> str:
        """Friendly label of a domain, e.g. ``acme.com`` -> ``Acme``."""
        if labels and domain in labels:
            return labels[domain]
        return domain.split(".")[0].capitalize()

    @staticmethod
    def default_team_name(
        first_name: str, email: Email, labels: Optional[Mapping[str, str]] = None
    ) -> str:
        owner = first_name.strip() or email.value.split("@")[0]
        return f"{owner}'s {TeamPolicy.domain_label(email.domain, labels)} Team"

    @staticmethod
    def ensure_can_invite(member: Optional[TeamMember], team_id) -> TeamMember:
        """
        Check that a member may invite to or cancel invitations of a team.

        Raises:
            ForbiddenError: If the actor is not an owner or admin of the team
        """
        if member is None or member.team_id != team_id or not member.role.can_invite:
            raise ForbiddenError("Only team owners and admins can manage invitations")
        return member

    @staticmethod
    def ensure_owner(member: Optional[TeamMember], team_id) -> TeamMember:
        """
        Check that a member owns a team.

        Raises:
            ForbiddenError: If the actor is not the owner of the team
        """
        if member is None or member.team_id != team_id or member.role is not TeamRole.OWNER:
            raise ForbiddenError("Only the team owner can perform this action")
        return member
