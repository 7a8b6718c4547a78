"""
GetLicenseStatisticsQuery.
"""

import uuid
from dataclasses import dataclass


@dataclass
class GetLicenseStatisticsQuery:
    """Query for purchased, assigned, activated, pending and available counts."""

    admin_id: uuid.UUID
