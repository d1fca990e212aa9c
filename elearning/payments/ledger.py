"""
Order Ledger

Pure storage for purchase attempts. The webhook reconciler owns every
invariant; this class only writes and reads rows.
"""

from decimal import Decimal
from typing import Iterable, Optional, Sequence, Tuple

from django.db.models import QuerySet

from ..courses.models import Course
from .models import Order, OrderItem


class OrderLedger:
    def create(
        self,
        *,
        user,
        status: str,
        items: Iterable[Tuple[Course, Decimal]],
        total_amount: Decimal,
        currency: str,
        payment_reference: str,
        payment_intent_id: str = "",
        customer_email: str = "",
        failure_reason: str = "",
        requested_course_ids: Sequence[int] = (),
    ) -> Order:
        """Persist an order and its (course, price at purchase) lines."""
        order = Order.objects.create(
            user=user,
            status=status,
            total_amount=total_amount,
            currency=currency,
            payment_reference=payment_reference,
            payment_intent_id=payment_intent_id or "",
            customer_email=customer_email or "",
            failure_reason=failure_reason,
            requested_course_ids=list(requested_course_ids),
        )
        OrderItem.objects.bulk_create(
            [
                OrderItem(order=order, course=course, course_title=course.title, price=price)
                for course, price in items
            ]
        )
        return order

    def find_by_payment_reference(self, reference: str) -> Optional[Order]:
        return Order.objects.filter(payment_reference=reference).first()

    def list_for_account(self, user) -> QuerySet[Order]:
        return Order.objects.filter(user=user).prefetch_related("items")
