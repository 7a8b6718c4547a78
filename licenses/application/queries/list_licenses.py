"""
ListLicensesQuery.
"""

import uuid
from dataclasses import dataclass


@dataclass
class ListLicensesQuery:
    """Query for licenses of the admin's scope with statistics."""

    admin_id: uuid.UUID
