"""
CancelInvitationCommand.
"""

import uuid
from dataclasses import dataclass


@dataclass
class CancelInvitationCommand:
    """Command for an owner or admin to cancel a pending invitation."""

    actor_id: uuid.UUID
    team_id: uuid.UUID
    invitation_id: uuid.UUID
