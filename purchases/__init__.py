"""
Purchases module - license purchases.

This module handles:
- Checkout through the external payment provider
- Crediting confirmed purchases to the buyer's scope, once per payment session
"""
