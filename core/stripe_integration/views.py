"""
Stripe Integration Views (core.stripe_integration)
==================================================

REST endpoints for buying courses through Stripe Checkout.

Endpoints
---------

1. CreateCheckoutSessionView
   - URL: /api/orders/create-checkout-session/
   - Method: POST
   - Auth: Required (Bearer JWT)
   - Body: {"items": [{"courseId": 3}, {"courseId": 5}]}
   - Purpose:
       Creates a hosted Checkout Session for the whole cart or a single
       "buy now" course at current catalog prices. Returns the session
       handle; the client redirects the buyer to `checkoutUrl`.

2. StripeWebhookView
   - URL: /api/orders/webhook/
   - Method: POST
   - Auth: None (authenticated by the `Stripe-Signature` header)
   - Purpose:
       Receives `checkout.session.completed` events and reconciles them into
       orders and course access. The body is read as raw bytes and verified
       before anything parses it.
   - Responses:
       400 when the signature is rejected, 200 for everything else
       (including fulfillment failures, which are recorded as failed orders).

Dependencies
------------
- Django REST Framework (API endpoints)
- stripe (official Python SDK), wrapped by `StripePaymentProvider`

Author: Marketplace Development Team
Date: 2025-09-03
"""

import logging

from django.apps import apps
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .checkout import CheckoutSessionIssuer
from .reconciler import WebhookReconciler
from .serializers import CheckoutRequestSerializer

logger = logging.getLogger(__name__)


def get_payment_provider():
    return apps.get_app_config("stripe_integration").payment_provider


class CreateCheckoutSessionView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CheckoutRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        issuer = CheckoutSessionIssuer(get_payment_provider())
        handle = issuer.issue(request.user, serializer.get_course_ids())

        return Response(
            {"sessionHandle": handle.id, "checkoutUrl": handle.url},
            status=status.HTTP_200_OK,
        )


class StripeWebhookView(APIView):
    """
    Dedicated, unprotected webhook endpoint.

    No authentication classes and no parsers run here: `request.body` is
    the untouched byte stream Stripe signed.
    """

    authentication_classes = []
    permission_classes = [AllowAny]
    parser_classes = []

    def post(self, request):
        reconciler = WebhookReconciler(get_payment_provider())
        result = reconciler.handle(request.body, request.META.get("HTTP_STRIPE_SIGNATURE"))
        return Response(
            {"received": True, "outcome": result.outcome},
            status=status.HTTP_200_OK,
        )
