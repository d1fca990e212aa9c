"""
Cart Store

Persisted mapping account -> set of (course, price snapshot) lines. All
operations touch only the caller's own cart.
"""

import logging
from typing import Iterable

from django.db import IntegrityError, transaction

from ..courses.models import Course
from ..enrollments.store import EntitlementStore
from ..exceptions import Conflict, NotFound, Unavailable
from .models import Cart, CartItem

logger = logging.getLogger(__name__)


class CartStore:
    """
    Cart operations for one account at a time.

    Example:
        >>> store = CartStore()
        >>> store.add(request.user, 42)
        >>> store.get(request.user).items.count()
    """

    def __init__(self, entitlements: EntitlementStore = None):
        self.entitlements = entitlements or EntitlementStore()

    def get(self, user) -> Cart:
        """
        Return the account's cart, creating it lazily.

        Lines whose course has been unpublished since it was added are
        removed and the filtered cart is persisted (self-healing read).
        """
        cart, _ = Cart.objects.get_or_create(user=user)
        stale = cart.items.filter(course__published=False)
        removed, _ = stale.delete()
        if removed:
            logger.info("Dropped %s unpublished course(s) from cart of user %s.", removed, user.pk)
            cart.save(update_fields=["updated_at"])
        return cart

    def add(self, user, course_id: int) -> Cart:
        """
        Add a course to the cart at its current catalog price.

        Raises:
            NotFound: the course does not exist
            Unavailable: the course is not published
            Conflict: the course is already in the cart or already owned
        """
        try:
            course = Course.objects.get(pk=course_id)
        except Course.DoesNotExist:
            raise NotFound("Course not found.", details={"course_id": course_id})
        if not course.published:
            raise Unavailable("Course is unavailable.", details={"course_id": course_id})
        if self.entitlements.owns(user, course.pk):
            raise Conflict("You already own this course.", details={"course_id": course_id})

        cart = self.get(user)
        if cart.items.filter(course=course).exists():
            raise Conflict("Course is already in your cart.", details={"course_id": course_id})

        try:
            with transaction.atomic():
                CartItem.objects.create(cart=cart, course=course, price=course.price)
        except IntegrityError:
            raise Conflict("Course is already in your cart.", details={"course_id": course_id})

        cart.save(update_fields=["updated_at"])
        logger.info("Added course %s to cart of user %s at %s.", course.pk, user.pk, course.price)
        return cart

    def remove(self, user, course_id: int) -> Cart:
        """Remove one course. Removing an absent course succeeds silently."""
        cart = self.get(user)
        cart.items.filter(course_id=course_id).delete()
        cart.save(update_fields=["updated_at"])
        return cart

    def remove_many(self, user, course_ids: Iterable[int]) -> int:
        """
        Remove the given courses from the cart, if present.

        Does not create a cart. Returns the number of lines removed.
        """
        removed, _ = CartItem.objects.filter(
            cart__user=user, course_id__in=list(course_ids)
        ).delete()
        return removed

    def clear(self, user) -> Cart:
        """Remove every line. Clearing an empty cart succeeds silently."""
        cart = self.get(user)
        cart.items.all().delete()
        cart.save(update_fields=["updated_at"])
        return cart
