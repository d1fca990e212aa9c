"""
Stripe Payment Provider Client
==============================

Thin, explicitly constructed wrapper around the official `stripe` SDK.

One instance is built at process startup (`StripeIntegrationConfig.ready`)
from Django settings and injected into the checkout issuer and the webhook
reconciler. Every API call passes the secret key per request, so the module
level `stripe.api_key` is never mutated.

Responsibilities
----------------
- Create hosted Checkout Sessions (`mode="payment"`).
- Verify webhook signatures over the exact raw request bytes and decode the
  event only after verification succeeded.
- Convert between Decimal amounts and Stripe's integer minor units.

Author: Marketplace Development Team
Date: 2025-09-03
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

import stripe
from django.conf import settings

from elearning.exceptions import PaymentProviderError, SignatureInvalid

logger = logging.getLogger(__name__)

# Currencies Stripe expects in whole units (no minor unit).
ZERO_DECIMAL_CURRENCIES = frozenset(
    {
        "bif", "clp", "djf", "gnf", "jpy", "kmf", "krw", "mga",
        "pyg", "rwf", "ugx", "vnd", "vuv", "xaf", "xof", "xpf",
    }
)


def to_minor_units(amount: Decimal, currency: str) -> int:
    """Decimal price -> integer amount in the currency's smallest unit."""
    if currency.lower() in ZERO_DECIMAL_CURRENCIES:
        return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(amount: int, currency: str) -> Decimal:
    """Integer amount in the smallest unit -> Decimal with two places."""
    if currency.lower() in ZERO_DECIMAL_CURRENCIES:
        return Decimal(amount).quantize(Decimal("0.01"))
    return (Decimal(amount) / 100).quantize(Decimal("0.01"))


@dataclass(frozen=True)
class CheckoutSessionHandle:
    """Opaque reference to a hosted checkout session."""

    id: str
    url: Optional[str]


class StripePaymentProvider:
    """
    Stripe client configured once and passed to the components that need it.

    Attributes:
        api_key: Secret API key used for Checkout Session creation
        webhook_secret: Signing secret of the webhook endpoint
        tolerance: Maximum accepted age of a webhook signature timestamp (seconds)
    """

    def __init__(self, api_key: str, webhook_secret: str, tolerance: int = 300) -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret
        self.tolerance = tolerance

    @classmethod
    def from_settings(cls) -> "StripePaymentProvider":
        return cls(
            api_key=settings.STRIPE_SECRET_KEY,
            webhook_secret=settings.STRIPE_WEBHOOK_SECRET,
            tolerance=settings.STRIPE_WEBHOOK_TOLERANCE,
        )

    def create_checkout_session(self, **params: Any) -> CheckoutSessionHandle:
        """
        Create a hosted Checkout Session.

        Raises:
            PaymentProviderError: Stripe rejected the request or was unreachable
        """
        if not self.api_key:
            raise PaymentProviderError("Payment provider is not configured.")
        try:
            session = stripe.checkout.Session.create(api_key=self.api_key, **params)
        except stripe.StripeError as exc:
            logger.exception("Stripe Checkout Session creation failed")
            raise PaymentProviderError(
                "Checkout session could not be created.",
                provider_message=getattr(exc, "user_message", None) or str(exc),
            ) from exc
        return CheckoutSessionHandle(id=session.id, url=getattr(session, "url", None))

    def verify_event(self, payload: bytes, signature_header: Optional[str]) -> stripe.Event:
        """
        Verify `payload` against the `Stripe-Signature` header and decode it
        into a `stripe.Event` (a dict subclass).

        The signature is computed over the exact bytes as sent, so nothing may
        parse or re-encode the body before this call.

        Raises:
            SignatureInvalid: header or secret missing, signature mismatch,
                timestamp outside tolerance, or body not valid UTF-8 JSON
        """
        if not signature_header:
            raise SignatureInvalid("Missing Stripe-Signature header.")
        if not self.webhook_secret:
            logger.error("STRIPE_WEBHOOK_SECRET is not configured; rejecting webhook.")
            raise SignatureInvalid("Webhook signing secret is not configured.")

        try:
            return stripe.Webhook.construct_event(
                payload, signature_header, self.webhook_secret, tolerance=self.tolerance
            )
        except ValueError as exc:
            # Body is not UTF-8 text or not JSON.
            raise SignatureInvalid(f"Invalid webhook payload: {exc}")
        except stripe.SignatureVerificationError as exc:
            raise SignatureInvalid(f"Webhook signature verification failed: {exc}")
