"""
ExportLicensesQuery.
"""

import uuid
from dataclasses import dataclass


@dataclass
class ExportLicensesQuery:
    """Query for the export table of the admin's scope."""

    admin_id: uuid.UUID
