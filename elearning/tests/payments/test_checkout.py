from decimal import Decimal
from types import SimpleNamespace
from unittest import mock

import stripe
from django.apps import apps
from rest_framework import status
from rest_framework.test import APITestCase

from core.stripe_integration.provider import StripePaymentProvider
from elearning.cart.store import CartStore
from elearning.enrollments.store import EntitlementStore
from elearning.payments.models import Order
from elearning.tests.factories import WEBHOOK_SECRET, make_course, make_user

CHECKOUT_URL = "/api/orders/create-checkout-session/"


def fake_session(session_id="cs_test_123"):
    return SimpleNamespace(id=session_id, url=f"https://checkout.stripe.com/c/pay/{session_id}")


class CreateCheckoutSessionTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = make_user("max")
        cls.python = make_course("Python Grundlagen", "50.00")
        cls.django = make_course("Django REST", "30.00")
        cls.draft = make_course("Entwurf", "10.00", published=False)

    def setUp(self):
        provider_patch = mock.patch.object(
            apps.get_app_config("stripe_integration"),
            "payment_provider",
            StripePaymentProvider(api_key="sk_test_123", webhook_secret=WEBHOOK_SECRET),
        )
        provider_patch.start()
        self.addCleanup(provider_patch.stop)

        session_patch = mock.patch("stripe.checkout.Session.create", return_value=fake_session())
        self.create_session = session_patch.start()
        self.addCleanup(session_patch.stop)

        self.client.force_authenticate(user=self.user)

    def _checkout(self, *course_ids):
        return self.client.post(
            CHECKOUT_URL,
            {"items": [{"courseId": course_id} for course_id in course_ids]},
            format="json",
        )

    def test_returns_session_handle(self):
        response = self._checkout(self.python.pk, self.django.pk)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["sessionHandle"], "cs_test_123")
        self.assertEqual(response.json()["checkoutUrl"], "https://checkout.stripe.com/c/pay/cs_test_123")

    def test_session_parameters(self):
        self._checkout(self.python.pk, self.django.pk)

        self.create_session.assert_called_once()
        kwargs = self.create_session.call_args.kwargs
        self.assertEqual(kwargs["api_key"], "sk_test_123")
        self.assertEqual(kwargs["mode"], "payment")
        self.assertEqual(kwargs["customer_email"], "max@test.com")
        self.assertEqual(kwargs["client_reference_id"], str(self.user.pk))
        self.assertEqual(
            [item["price_data"]["unit_amount"] for item in kwargs["line_items"]],
            [5000, 3000],
        )
        self.assertEqual(
            [item["price_data"]["product_data"]["name"] for item in kwargs["line_items"]],
            ["Python Grundlagen", "Django REST"],
        )
        self.assertEqual(
            kwargs["metadata"],
            {
                "intent_version": "1",
                "account_id": str(self.user.pk),
                "course_ids": f"{self.python.pk},{self.django.pk}",
                "email": "max@test.com",
            },
        )
        self.assertIn("{CHECKOUT_SESSION_ID}", kwargs["success_url"])

    def test_uses_current_price_not_cart_snapshot(self):
        CartStore().add(self.user, self.python.pk)
        self.python.price = Decimal("60.00")
        self.python.save()

        self._checkout(self.python.pk)

        line_items = self.create_session.call_args.kwargs["line_items"]
        self.assertEqual(line_items[0]["price_data"]["unit_amount"], 6000)

    def test_unresolvable_course_rejects_whole_request(self):
        response = self._checkout(self.python.pk, 999999)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["code"], "invalid_request")
        self.assertEqual(response.json()["details"]["missing_course_ids"], [999999])
        self.create_session.assert_not_called()

    def test_unpublished_course_is_not_purchasable(self):
        response = self._checkout(self.draft.pk)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.create_session.assert_not_called()

    def test_duplicate_course_ids_rejected(self):
        response = self._checkout(self.python.pk, self.python.pk)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.create_session.assert_not_called()

    def test_empty_items_rejected(self):
        response = self.client.post(CHECKOUT_URL, {"items": []}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.create_session.assert_not_called()

    def test_already_owned_course_conflicts(self):
        EntitlementStore().grant(self.user, [self.django.pk], source="manual")
        response = self._checkout(self.python.pk, self.django.pk)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.create_session.assert_not_called()

    def test_provider_error_returns_502_without_side_effects(self):
        self.create_session.side_effect = stripe.APIConnectionError("Network down")

        response = self._checkout(self.python.pk)

        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(response.json()["code"], "payment_provider_error")
        self.assertEqual(Order.objects.count(), 0)
        self.assertFalse(EntitlementStore().owns(self.user, self.python.pk))

    def test_missing_api_key_returns_502(self):
        with mock.patch.object(
            apps.get_app_config("stripe_integration"),
            "payment_provider",
            StripePaymentProvider(api_key="", webhook_secret=WEBHOOK_SECRET),
        ):
            response = self._checkout(self.python.pk)
        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.create_session.assert_not_called()

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)
        response = self._checkout(self.python.pk)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_checkout_does_not_touch_cart(self):
        CartStore().add(self.user, self.python.pk)
        self._checkout(self.python.pk)
        self.assertEqual(CartStore().get(self.user).items.count(), 1)
