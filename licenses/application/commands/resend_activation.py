"""
ResendActivationCommand.
"""

import uuid
from dataclasses import dataclass


@dataclass
class ResendActivationCommand:
    """Command to send the activation email of a pending license again."""

    admin_id: uuid.UUID
    license_id: uuid.UUID
