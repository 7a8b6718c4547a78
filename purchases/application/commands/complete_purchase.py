"""
CompletePurchaseCommand.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class CompletePurchaseCommand:
    """
    Command to credit a confirmed purchase.

    ``session_id`` identifies the payment; a repeated id is credited only
    once and a missing one is rejected.
    """

    admin_id: uuid.UUID
    license_count: int
    session_id: Optional[str] = None
