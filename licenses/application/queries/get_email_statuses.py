"""
GetEmailStatusesQuery.
"""

import uuid
from dataclasses import dataclass, field
from typing import List


@dataclass
class GetEmailStatusesQuery:
    """Query for provider delivery status of activation emails."""

    admin_id: uuid.UUID
    message_ids: List[str] = field(default_factory=list)
