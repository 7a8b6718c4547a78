"""
UpdateMemberRoleCommand.
"""

import uuid
from dataclasses import dataclass


@dataclass
class UpdateMemberRoleCommand:
    """Command for the owner to change a member's role."""

    actor_id: uuid.UUID
    team_id: uuid.UUID
    member_id: uuid.UUID
    role: str
