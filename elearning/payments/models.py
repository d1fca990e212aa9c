"""
Order Ledger Models

One `Order` per reconciled checkout attempt. Orders are materialized only when
the payment provider's completion event is reconciled, either as `completed`
(access granted) or as `failed` (payment captured, fulfillment needs an
operator). The checkout session itself lives with the provider.

Models:
- Order: Purchase attempt with its terminal status and payment reference
- OrderItem: Course and catalog price at purchase time

Idempotency:
- `payment_reference` is unique. Reconciliation looks it up before writing,
  and the constraint settles concurrent duplicate deliveries.

Author: Marketplace Development Team
Version: 1.0.0
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from ..courses.models import Course


class Order(models.Model):
    """
    Record of one purchase attempt.

    Attributes:
        user: Purchasing account (null if the account could not be resolved)
        status: completed | failed | refunded
        total_amount: Amount the provider reports it captured
        currency: ISO currency code (lowercase)
        payment_reference: Provider checkout session id
        payment_intent_id: Provider payment intent id, for refund correlation
        customer_email: Buyer email reported by the provider
        failure_reason: Error message for failed orders
        requested_course_ids: Course ids as requested in the checkout metadata
        created_at: Timestamp of reconciliation
    """

    class Status(models.TextChoices):
        COMPLETED = "completed", _("Completed")
        FAILED = "failed", _("Failed")
        # Reserved; no flow writes it yet.
        REFUNDED = "refunded", _("Refunded")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
        verbose_name=_("User"),
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        verbose_name=_("Status"),
    )

    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        verbose_name=_("Total Amount"),
        help_text=_("Amount captured by the payment provider"),
    )

    currency = models.CharField(max_length=3, verbose_name=_("Currency"))

    payment_reference = models.CharField(
        max_length=255,
        unique=True,
        verbose_name=_("Payment Reference"),
        help_text=_("Checkout session id at the payment provider"),
    )

    payment_intent_id = models.CharField(
        max_length=255,
        blank=True,
        default="",
        verbose_name=_("Payment Intent"),
    )

    customer_email = models.EmailField(blank=True, default="", verbose_name=_("Customer Email"))

    failure_reason = models.TextField(
        blank=True,
        default="",
        verbose_name=_("Failure Reason"),
        help_text=_("Why fulfillment failed; set for failed orders only"),
    )

    requested_course_ids = models.JSONField(
        default=list,
        blank=True,
        verbose_name=_("Requested Course IDs"),
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("Created At"))

    def __str__(self) -> str:
        return f"Order {self.pk} ({self.status}) {self.payment_reference}"

    class Meta:
        verbose_name = _("Order")
        verbose_name_plural = _("Orders")
        ordering = ["-created_at", "-id"]
        db_table = "elearning_order"


class OrderItem(models.Model):
    """A purchased course and its catalog price at purchase time."""

    order = models.ForeignKey(
        Order,
        related_name="items",
        on_delete=models.CASCADE,
        verbose_name=_("Order"),
    )

    course = models.ForeignKey(
        Course,
        related_name="order_items",
        on_delete=models.SET_NULL,
        null=True,
        verbose_name=_("Course"),
    )

    course_title = models.CharField(max_length=100, verbose_name=_("Course Title"))

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        verbose_name=_("Price At Purchase"),
    )

    def __str__(self) -> str:
        return f"{self.course_title} @ {self.price}"

    class Meta:
        verbose_name = _("Order Item")
        verbose_name_plural = _("Order Items")
        ordering = ["order", "id"]
        db_table = "elearning_order_item"
