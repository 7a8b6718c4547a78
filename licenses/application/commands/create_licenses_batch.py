"""
CreateLicensesBatchCommand.

Command to assign licenses to several emails at once.
"""

import uuid
from dataclasses import dataclass, field
from typing import List


@dataclass
class CreateLicensesBatchCommand:
    """
    Command to create licenses for a list of emails.

    The whole batch is rejected up front when the scope cannot take
    ``len(emails)`` more licenses.
    """

    admin_id: uuid.UUID
    emails: List[str] = field(default_factory=list)
