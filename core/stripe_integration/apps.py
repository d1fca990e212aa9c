"""
Stripe Integration AppConfig
============================

This module defines the Django application configuration for the local
`core.stripe_integration` app. It is responsible for:

- Registering with Django (name, verbose label, default PK field).
- Building the single `StripePaymentProvider` for this process from settings.
  Views obtain it from the app config and inject it into the checkout issuer
  and the webhook reconciler; nothing sets `stripe.api_key` globally.

Operational notes
-----------------
- `ready()` is executed on every process start; it must not touch the
  database or the network. Constructing the provider only reads settings.
- Tests swap the provider with `mock.patch.object(app_config, "payment_provider", ...)`.

Author: Marketplace Development Team
Date: 2025-09-03
"""

from django.apps import AppConfig


class StripeIntegrationConfig(AppConfig):
    """
    App configuration for the `core.stripe_integration` package.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "core.stripe_integration"
    label = "stripe_integration"
    verbose_name = "Stripe Integration"

    payment_provider = None

    def ready(self):
        from .provider import StripePaymentProvider

        self.payment_provider = StripePaymentProvider.from_settings()
