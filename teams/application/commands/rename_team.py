"""
RenameTeamCommand.
"""

import uuid
from dataclasses import dataclass


@dataclass
class RenameTeamCommand:
    """Command for the owner to rename a team."""

    actor_id: uuid.UUID
    team_id: uuid.UUID
    name: str
