"""
Stripe Webhook Reconciler
=========================

Turns a signed "checkout completed" event into an order, course access and a
trimmed cart, exactly once per checkout session.

State per payment reference (the Checkout Session id)
-----------------------------------------------------
- unseen      → no `Order` row with that `payment_reference`
- reconciled  → an `Order` row exists (status `completed` or `failed`)

The transition happens at most once. Later deliveries of the same event find
the row and return without mutating anything.

Pipeline
--------
1. Verify the signature over the raw bytes (`SignatureInvalid` → HTTP 400).
   Nothing below runs for an unverified body.
2. Only `checkout.session.completed` and
   `checkout.session.async_payment_succeeded` fulfil; any other verified
   event is acknowledged and ignored. A completed session that is still
   `unpaid` (delayed payment method) waits for the async success event.
3. Idempotency lookup by payment reference.
4. Parse `CheckoutMetadata` (account id + course ids).
5. Re-fetch the account and every course.
6. One transaction: create the completed `Order` (total = amount Stripe
   captured), grant entitlements (set-union), remove the courses from the
   cart. The unique constraint on `payment_reference` turns a concurrent
   duplicate delivery into a no-op.
7. Any failure in 4–6 is persisted as a `failed` Order with the error
   message for operator review. Stripe has already captured the payment, so
   the webhook is still acknowledged (HTTP 200) to stop redelivery.
   If even the `failed` Order cannot be written, the delivery is still
   acknowledged with outcome `failed` and no order id; the ERROR log line
   (reference + reason) is then the only record.

Logging
-------
- Receipt of every verified event at INFO, duplicates at INFO.
- Fulfillment failures at ERROR (with stack trace for unexpected errors).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from elearning.cart.store import CartStore
from elearning.courses.models import Course
from elearning.enrollments.store import EntitlementStore
from elearning.exceptions import FulfillmentFailure
from elearning.payments.ledger import OrderLedger
from elearning.payments.models import Order

from .metadata import CheckoutMetadata
from .provider import StripePaymentProvider, from_minor_units

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"
ASYNC_PAYMENT_SUCCEEDED = "checkout.session.async_payment_succeeded"
FULFILLMENT_EVENTS = frozenset({CHECKOUT_COMPLETED, ASYNC_PAYMENT_SUCCEEDED})

ENROLLMENT_SOURCE = "stripe_checkout"


class Outcome:
    FULFILLED = "fulfilled"
    DUPLICATE = "duplicate"
    IGNORED = "ignored"
    DEFERRED = "deferred"
    FAILED = "failed"


@dataclass(frozen=True)
class ReconciliationResult:
    outcome: str
    reference: Optional[str] = None
    order_id: Optional[int] = None


@dataclass
class _Attempt:
    """What is known about one fulfillment attempt, for the failure record."""

    reference: str
    currency: str
    payment_intent_id: str = ""
    customer_email: str = ""
    captured: Optional[Decimal] = None
    user: Any = None
    requested_course_ids: Sequence[int] = ()
    courses: Sequence[Course] = ()


def _extract_data_object(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return the event's `data.object` payload.

    Standard Stripe event shape: {"type": ..., "data": {"object": {...}}}
    """
    data = event.get("data")
    if isinstance(data, dict) and isinstance(data.get("object"), dict):
        return data["object"]
    return {}


class WebhookReconciler:
    """
    Reconciles verified Stripe checkout events into orders and entitlements.

    All collaborators are injected; defaults are the ORM-backed stores.
    """

    def __init__(
        self,
        provider: StripePaymentProvider,
        ledger: OrderLedger = None,
        entitlements: EntitlementStore = None,
        carts: CartStore = None,
    ) -> None:
        self.provider = provider
        self.ledger = ledger or OrderLedger()
        self.entitlements = entitlements or EntitlementStore()
        self.carts = carts or CartStore(self.entitlements)

    def handle(self, payload: bytes, signature_header: Optional[str]) -> ReconciliationResult:
        """
        Process one webhook delivery.

        Raises:
            SignatureInvalid: the only error that escapes; everything after
                verification is acknowledged
        """
        event = self.provider.verify_event(payload, signature_header)

        event_type = event.get("type")
        logger.info("[webhook] %s (event_id=%s)", event_type, event.get("id"))

        if event_type not in FULFILLMENT_EVENTS:
            # Not an error: we simply don't need to act on every event type.
            logger.debug("Unhandled event type: %s", event_type)
            return ReconciliationResult(Outcome.IGNORED)

        session = _extract_data_object(event)
        reference = session.get("id")
        if not isinstance(reference, str) or not reference:
            logger.error(
                "%s event %s carries no checkout session id; cannot reconcile.",
                event_type, event.get("id"),
            )
            return ReconciliationResult(Outcome.IGNORED)

        existing = self.ledger.find_by_payment_reference(reference)
        if existing is not None:
            logger.info(
                "Checkout session %s already reconciled as order %s (%s).",
                reference, existing.pk, existing.status,
            )
            return ReconciliationResult(Outcome.DUPLICATE, reference, existing.pk)

        if event_type == CHECKOUT_COMPLETED and session.get("payment_status") == "unpaid":
            logger.info("Checkout session %s completed but unpaid; awaiting async payment.", reference)
            return ReconciliationResult(Outcome.DEFERRED, reference)

        return self._fulfil(session, reference)

    # ---------- fulfillment ----------

    def _fulfil(self, session: Dict[str, Any], reference: str) -> ReconciliationResult:
        customer_details = session.get("customer_details") or {}
        attempt = _Attempt(
            reference=reference,
            currency=(session.get("currency") or settings.DEFAULT_CURRENCY).lower(),
            payment_intent_id=session.get("payment_intent") or "",
            customer_email=customer_details.get("email") or session.get("customer_email") or "",
        )

        try:
            attempt.captured = self._captured_amount(session, attempt.currency)
            metadata = CheckoutMetadata.from_provider(session.get("metadata"))
            attempt.requested_course_ids = list(metadata.course_ids)
            attempt.customer_email = attempt.customer_email or metadata.email
            attempt.user = self._resolve_account(metadata.account_id)
            attempt.courses = self._resolve_courses(metadata.course_ids)
            self._check_all_resolved(attempt)
            order = self._commit(attempt)
        except FulfillmentFailure as exc:
            logger.error("Fulfillment failed for checkout session %s: %s", reference, exc.message)
            return self._record_failure(attempt, exc.message)
        except IntegrityError:
            concurrent = self.ledger.find_by_payment_reference(reference)
            if concurrent is not None:
                logger.info("Checkout session %s reconciled concurrently as order %s.", reference, concurrent.pk)
                return ReconciliationResult(Outcome.DUPLICATE, reference, concurrent.pk)
            logger.exception("Integrity error while fulfilling checkout session %s", reference)
            return self._record_failure(attempt, "Database integrity error during fulfillment.")
        except Exception as exc:
            logger.exception("Unexpected error while fulfilling checkout session %s", reference)
            return self._record_failure(attempt, f"{exc.__class__.__name__}: {exc}")

        logger.info(
            "Checkout session %s fulfilled: order %s, user %s, courses %s, total %s %s.",
            reference, order.pk, attempt.user.pk,
            [course.pk for course in attempt.courses], order.total_amount, order.currency,
        )
        return ReconciliationResult(Outcome.FULFILLED, reference, order.pk)

    def _captured_amount(self, session: Dict[str, Any], currency: str) -> Decimal:
        amount_total = session.get("amount_total")
        if isinstance(amount_total, bool) or not isinstance(amount_total, int) or amount_total < 0:
            raise FulfillmentFailure(f"Checkout session reports no valid amount_total: {amount_total!r}")
        return from_minor_units(amount_total, currency)

    def _resolve_account(self, account_id: int):
        User = get_user_model()
        try:
            return User.objects.get(pk=account_id)
        except User.DoesNotExist:
            raise FulfillmentFailure(f"Account {account_id} not found.")

    def _resolve_courses(self, course_ids: Sequence[int]) -> List[Course]:
        """Courses that still exist, in requested order. Published or not."""
        by_id = {course.pk: course for course in Course.objects.filter(pk__in=course_ids)}
        return [by_id[course_id] for course_id in course_ids if course_id in by_id]

    def _check_all_resolved(self, attempt: _Attempt) -> None:
        if len(attempt.courses) == len(attempt.requested_course_ids):
            return
        found = {course.pk for course in attempt.courses}
        missing = [course_id for course_id in attempt.requested_course_ids if course_id not in found]
        raise FulfillmentFailure(
            f"Courses not found: {', '.join(str(course_id) for course_id in missing)}.",
            details={"missing_course_ids": missing},
        )

    def _commit(self, attempt: _Attempt) -> Order:
        course_ids = [course.pk for course in attempt.courses]
        catalog_total = sum((course.price for course in attempt.courses), Decimal("0.00"))
        if catalog_total != attempt.captured:
            # Discounts, taxes or price edits after checkout; the capture wins.
            logger.warning(
                "Captured amount %s differs from catalog total %s for checkout session %s.",
                attempt.captured, catalog_total, attempt.reference,
            )

        with transaction.atomic():
            order = self.ledger.create(
                user=attempt.user,
                status=Order.Status.COMPLETED,
                items=[(course, course.price) for course in attempt.courses],
                total_amount=attempt.captured,
                currency=attempt.currency,
                payment_reference=attempt.reference,
                payment_intent_id=attempt.payment_intent_id,
                customer_email=attempt.customer_email,
                requested_course_ids=attempt.requested_course_ids,
            )
            self.entitlements.grant(
                attempt.user, course_ids, source=ENROLLMENT_SOURCE, reference=attempt.reference
            )
            self.carts.remove_many(attempt.user, course_ids)
        return order

    def _record_failure(self, attempt: _Attempt, reason: str) -> ReconciliationResult:
        """
        Persist a `failed` order for operator review. Grants nothing.

        Items hold only the courses that did resolve; the full request is
        kept in `requested_course_ids`.
        """
        try:
            with transaction.atomic():
                order = self.ledger.create(
                    user=attempt.user,
                    status=Order.Status.FAILED,
                    items=[(course, course.price) for course in attempt.courses],
                    total_amount=attempt.captured if attempt.captured is not None else Decimal("0.00"),
                    currency=attempt.currency,
                    payment_reference=attempt.reference,
                    payment_intent_id=attempt.payment_intent_id,
                    customer_email=attempt.customer_email,
                    failure_reason=reason,
                    requested_course_ids=attempt.requested_course_ids,
                )
        except IntegrityError:
            existing = self.ledger.find_by_payment_reference(attempt.reference)
            logger.info(
                "Checkout session %s was reconciled concurrently; failure not recorded.",
                attempt.reference,
            )
            return ReconciliationResult(
                Outcome.DUPLICATE, attempt.reference, existing.pk if existing else None
            )
        except Exception:
            # The delivery is still acknowledged; the log line is the only record.
            logger.exception(
                "Could not record failed order for checkout session %s (reason: %s)",
                attempt.reference, reason,
            )
            return ReconciliationResult(Outcome.FAILED, attempt.reference)

        logger.error(
            "Recorded failed order %s for checkout session %s; manual follow-up required.",
            order.pk, attempt.reference,
        )
        return ReconciliationResult(Outcome.FAILED, attempt.reference, order.pk)
