"""
Cart Models

One cart per account holding the courses awaiting purchase. Each line stores
the price captured when the course was added; later catalog price changes do
not alter an in-flight cart.
"""

from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from ..courses.models import Course


class Cart(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cart",
        verbose_name=_("User"),
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("Created At"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("Updated At"))

    def __str__(self) -> str:
        return f"Cart of {self.user.username}"

    class Meta:
        verbose_name = _("Cart")
        verbose_name_plural = _("Carts")
        db_table = "elearning_cart"

    @property
    def total(self) -> Decimal:
        """Sum of the snapshot prices of all lines."""
        return sum((item.price for item in self.items.all()), Decimal("0.00"))


class CartItem(models.Model):
    """
    One course in a cart with its price snapshot.

    There is no quantity: a course is either in the cart or not.
    """

    cart = models.ForeignKey(
        Cart,
        related_name="items",
        on_delete=models.CASCADE,
        verbose_name=_("Cart"),
    )

    course = models.ForeignKey(
        Course,
        related_name="cart_items",
        on_delete=models.CASCADE,
        verbose_name=_("Course"),
    )

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        verbose_name=_("Price Snapshot"),
        help_text=_("Catalog price at the time the course was added"),
    )

    added_at = models.DateTimeField(auto_now_add=True, verbose_name=_("Added At"))

    def __str__(self) -> str:
        return f"{self.course.title} @ {self.price}"

    class Meta:
        verbose_name = _("Cart Item")
        verbose_name_plural = _("Cart Items")
        unique_together = ("cart", "course")
        ordering = ["added_at", "id"]
        db_table = "elearning_cart_item"
