"""
Notifications module - activation and invitation emails.

This module handles:
- Partner branding for outbound email
- Invitation workflow (license activation, team invitation, delivery status)
- Email sender adapters (HTTP email API, Django mail backend)
"""
