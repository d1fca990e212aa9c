"""
Core Package

Shared integrations used by the marketplace apps. Currently houses the
Stripe integration (`core.stripe_integration`).
"""
