"""
CreateLicenseCommand.

Command to assign a license to one email in the admin's scope.
"""

import uuid
from dataclasses import dataclass


@dataclass
class CreateLicenseCommand:
    """Command to create a license and send its activation email."""

    admin_id: uuid.UUID
    email: str
