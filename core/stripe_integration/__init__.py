"""
Stripe integration: checkout session issuance and webhook reconciliation.
"""
