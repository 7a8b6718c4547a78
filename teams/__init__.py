"""
Teams module - team membership and invitations.

This module handles:
- Team, TeamMember and Invitation entities
- Scope resolution (team or solo admin)
- Team creation, invitations, role changes and member removal
- Team activity log
"""
