"""Model registration for the teams app."""
from teams.infrastructure.models import (  # noqa: F401
    Invitation,
    Team,
    TeamActivity,
    TeamMember,
)
