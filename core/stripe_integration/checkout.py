"""
Checkout Session Issuer
=======================

Mints a hosted Stripe Checkout Session for an explicit list of courses,
either the account's whole cart or a single "buy now" course.

Contract
--------
1. Every requested id must resolve to a published course; otherwise the whole
   request fails with `InvalidRequest`. Nothing is silently dropped.
2. Line items use the *current* catalog price, never a cart snapshot, so a
   stale cart cannot check out at a stale price.
3. The session carries the buyer email, redirect targets and the versioned
   `CheckoutMetadata` (account id + exact course id list).
4. Nothing is written locally. The order is materialized by the webhook.
"""

import logging
from typing import List, Sequence

from django.conf import settings

from elearning.courses.models import Course
from elearning.enrollments.store import EntitlementStore
from elearning.exceptions import Conflict, InvalidRequest

from .metadata import CheckoutMetadata
from .provider import CheckoutSessionHandle, StripePaymentProvider, to_minor_units

logger = logging.getLogger(__name__)


class CheckoutSessionIssuer:
    def __init__(
        self,
        provider: StripePaymentProvider,
        entitlements: EntitlementStore = None,
        *,
        currency: str = None,
        success_url: str = None,
        cancel_url: str = None,
        max_items: int = None,
    ) -> None:
        self.provider = provider
        self.entitlements = entitlements or EntitlementStore()
        self.currency = (currency or settings.DEFAULT_CURRENCY).lower()
        self.success_url = success_url or settings.CHECKOUT_SUCCESS_URL
        self.cancel_url = cancel_url or settings.CHECKOUT_CANCEL_URL
        self.max_items = max_items or settings.CHECKOUT_MAX_ITEMS

    def resolve_courses(self, course_ids: Sequence[int]) -> List[Course]:
        """
        Resolve ids to published courses, keeping the requested order.

        Raises:
            InvalidRequest: empty, duplicated, oversized or unresolvable list
        """
        if not course_ids:
            raise InvalidRequest("At least one course is required.")
        if len(set(course_ids)) != len(course_ids):
            raise InvalidRequest("A course may only be listed once per checkout.")
        if len(course_ids) > self.max_items:
            raise InvalidRequest(
                f"A checkout may contain at most {self.max_items} courses.",
                details={"max_items": self.max_items},
            )

        by_id = {course.pk: course for course in Course.objects.published().filter(pk__in=course_ids)}
        if len(by_id) != len(course_ids):
            missing = [course_id for course_id in course_ids if course_id not in by_id]
            raise InvalidRequest(
                "One or more courses not found.",
                details={"missing_course_ids": missing},
            )
        return [by_id[course_id] for course_id in course_ids]

    def build_line_items(self, courses: Sequence[Course]) -> List[dict]:
        return [
            {
                "price_data": {
                    "currency": self.currency,
                    "product_data": {"name": course.title},
                    "unit_amount": to_minor_units(course.price, self.currency),
                },
                "quantity": 1,
            }
            for course in courses
        ]

    def issue(self, user, course_ids: Sequence[int]) -> CheckoutSessionHandle:
        """
        Create a checkout session for `course_ids` on behalf of `user`.

        Raises:
            InvalidRequest: see `resolve_courses`
            Conflict: the account already owns one of the courses
            PaymentProviderError: Stripe failed to create the session
        """
        courses = self.resolve_courses(list(course_ids))

        owned = self.entitlements.course_ids_for(user) & {course.pk for course in courses}
        if owned:
            raise Conflict(
                "You already own one or more of these courses.",
                details={"owned_course_ids": sorted(owned)},
            )

        metadata = CheckoutMetadata(
            account_id=user.pk,
            course_ids=tuple(course.pk for course in courses),
            email=user.email or "",
        )

        params = dict(
            mode="payment",
            line_items=self.build_line_items(courses),
            success_url=self.success_url,
            cancel_url=self.cancel_url,
            client_reference_id=str(user.pk),
            metadata=metadata.to_provider(),
        )
        if user.email:
            params["customer_email"] = user.email

        handle = self.provider.create_checkout_session(**params)
        logger.info(
            "Checkout session %s issued for user %s (courses=%s).",
            handle.id, user.pk, list(metadata.course_ids),
        )
        return handle
