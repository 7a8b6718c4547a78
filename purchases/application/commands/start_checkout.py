"""
StartCheckoutCommand.
"""

import uuid
from dataclasses import dataclass


@dataclass
class StartCheckoutCommand:
    """Command to start a license checkout for an admin."""

    admin_id: uuid.UUID
    license_count: int
