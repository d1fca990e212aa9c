"""
Marketplace Application Models Registry

This module serves as the central models registry for the marketplace app.
It imports and exposes all models from the logical submodules so they are
registered with Django's ORM system under the `elearning` app label.

Architecture:
- users/: Account profiles and roles
- courses/: Course catalog (categories, courses, modules, lessons)
- cart/: Per-account carts with price snapshots
- enrollments/: Entitlement store (owned courses)
- payments/: Order ledger

Author: Marketplace Development Team
Version: 1.0.0
"""

from .users.models import Profile
from .courses.models import Category, Course, CourseModule, Lesson
from .cart.models import Cart, CartItem
from .enrollments.models import CourseEnrollment
from .payments.models import Order, OrderItem

__all__ = [
    "Profile",
    "Category",
    "Course",
    "CourseModule",
    "Lesson",
    "Cart",
    "CartItem",
    "CourseEnrollment",
    "Order",
    "OrderItem",
]
