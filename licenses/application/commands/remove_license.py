"""
RemoveLicenseCommand.
"""

import uuid
from dataclasses import dataclass


@dataclass
class RemoveLicenseCommand:
    """Command to delete a license from the admin's scope."""

    admin_id: uuid.UUID
    license_id: uuid.UUID
