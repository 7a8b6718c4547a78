"""
Team domain entity.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.exceptions import ValidationError
from core.domain.value_objects import TeamScope

MAX_TEAM_NAME_LENGTH = 255


def validate_team_name(name) -> str:
    """
    Validate and trim a team name.

    Raises:
        ValidationError: If the name is blank or too long
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Team name is required")
    name = name.strip()
    if len(name) > MAX_TEAM_NAME_LENGTH:
        raise ValidationError(f"Team name must be at most {MAX_TEAM_NAME_LENGTH} characters")
    return name


@dataclass(frozen=True)
class Team:
    """
    Team domain entity.

    ``domain`` is taken from the owner's email when the team is created and
    never changes; only emails in that domain can be invited.
    """

    id: uuid.UUID
    name: str
    domain: str
    owner_id: uuid.UUID
    purchased_license_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls,
        name: str,
        domain: str,
        owner_id: uuid.UUID,
        purchased_license_count: int = 0,
        team_id: Optional[uuid.UUID] = None,
    ) -> "Team":
        """
        Create a new Team entity.

        Args:
            name: Display name
            domain: Email domain of the owner
            owner_id: Admin UUID of the owner
            purchased_license_count: Starting quota
            team_id: Optional UUID (generated if not provided)

        Returns:
            Team entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=team_id or uuid.uuid4(),
            name=validate_team_name(name),
            domain=domain.lower(),
            owner_id=owner_id,
            purchased_license_count=purchased_license_count,
            created_at=now,
            updated_at=now,
        )

    def rename(self, new_name: str) -> "Team":
        return replace(
            self, name=validate_team_name(new_name), updated_at=datetime.now(timezone.utc)
        )

    @property
    def scope(self) -> TeamScope:
        return TeamScope(self.id)
