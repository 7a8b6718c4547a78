"""
RemoveMemberCommand.
"""

import uuid
from dataclasses import dataclass


@dataclass
class RemoveMemberCommand:
    """Command for the owner to remove a member from a team."""

    actor_id: uuid.UUID
    team_id: uuid.UUID
    member_id: uuid.UUID
