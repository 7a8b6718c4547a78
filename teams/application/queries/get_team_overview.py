"""
GetTeamOverviewQuery.
"""

import uuid
from dataclasses import dataclass


@dataclass
class GetTeamOverviewQuery:
    """Query for the team screen of an admin."""

    admin_id: uuid.UUID
