"""
ImportLicensesCommand.

Command to create licenses from rows of an uploaded table.
"""

import uuid
from dataclasses import dataclass, field
from typing import List, Sequence


@dataclass
class ImportLicensesCommand:
    """
    Command to import licenses.

    ``rows`` are parsed table rows including the header row; the first
    column holds the email.
    """

    admin_id: uuid.UUID
    rows: List[Sequence[str]] = field(default_factory=list)
