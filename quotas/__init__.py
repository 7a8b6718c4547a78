"""
Quotas module - purchased license counts per organization scope.

This module handles:
- Quota ledger (availability, admission, purchase application)
- Quota repository (port)
- Purchase reconciliation records (Django ORM)
"""
