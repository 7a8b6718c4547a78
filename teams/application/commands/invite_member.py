"""
InviteMemberCommand.
"""

import uuid
from dataclasses import dataclass


@dataclass
class InviteMemberCommand:
    """Command for an owner or admin to invite an email into a team."""

    inviter_id: uuid.UUID
    team_id: uuid.UUID
    email: str
    role: str = "member"
