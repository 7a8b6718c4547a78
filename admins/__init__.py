"""
Admins module - administrator identity and solo-admin quota.

This module handles:
- Admin entity (identity, role claim, solo purchased license count)
- Admin repository (port)
- Admin infrastructure (Django ORM adapters)
"""
