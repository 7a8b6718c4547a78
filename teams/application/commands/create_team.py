"""
CreateTeamCommand.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class CreateTeamCommand:
    """
    Command for an admin to create a team it owns.

    Without a name the team gets a default name built from the owner's first
    name and email domain.
    """

    admin_id: uuid.UUID
    name: Optional[str] = None
