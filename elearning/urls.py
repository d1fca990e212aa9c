"""
Marketplace URL Configuration

URL Structure:
- /api/token/: Authentication endpoints (JWT token management)
- /api/cart/: The caller's cart
- /api/courses/<id>/content/: Content of an owned course
- /api/orders/: Order history and owned courses

Checkout and the Stripe webhook are mounted under /api/orders/ by
`core.stripe_integration.urls`.

Author: Marketplace Development Team
Version: 1.0.0
"""

from typing import List

from django.urls import URLPattern, include, path
from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView,
    TokenVerifyView,
)

from .cart import views as cart_views
from .courses import views as course_views
from .payments import views as order_views

app_name = "elearning"

# --- Cart ---

cart_urlpatterns: List[URLPattern] = [
    path("", cart_views.CartView.as_view(), name="cart"),
    path("add/", cart_views.AddToCartView.as_view(), name="cart-add"),
    path("<int:course_id>/", cart_views.RemoveFromCartView.as_view(), name="cart-remove"),
]

# --- Courses ---

courses_urlpatterns: List[URLPattern] = [
    path("<int:course_id>/content/", course_views.CourseContentView.as_view(), name="course-content"),
]

# --- Orders ---

orders_urlpatterns: List[URLPattern] = [
    path("", order_views.OrderListView.as_view(), name="order-list"),
    path("my-courses/", order_views.MyCoursesView.as_view(), name="my-courses"),
]

urlpatterns: List[URLPattern] = [
    # Authentication endpoints (JWT token management)
    path("token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("token/verify/", TokenVerifyView.as_view(), name="token_verify"),

    path("cart/", include((cart_urlpatterns, "cart"))),
    path("courses/", include((courses_urlpatterns, "courses"))),
    path("orders/", include((orders_urlpatterns, "orders"))),
]
