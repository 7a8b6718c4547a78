"""
UpdateLicenseEmailCommand.
"""

import uuid
from dataclasses import dataclass


@dataclass
class UpdateLicenseEmailCommand:
    """Command to move a pending license to another email address."""

    admin_id: uuid.UUID
    license_id: uuid.UUID
    email: str
