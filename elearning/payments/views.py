"""
Order Views
===========

Read-only endpoints over the order ledger and the entitlement store.

1. OrderListView
   - URL: /api/orders/
   - Method: GET
   - Auth: Required
   - Purpose: The caller's orders, newest first.

2. MyCoursesView
   - URL: /api/orders/my-courses/
   - Method: GET
   - Auth: Required
   - Purpose: Every course the caller owns.

Checkout and the Stripe webhook live in `core.stripe_integration`.
"""

from rest_framework import generics, permissions

from ..courses.serializers import CourseSummarySerializer
from ..enrollments.store import EntitlementStore
from .ledger import OrderLedger
from .serializers import OrderSerializer


class OrderListView(generics.ListAPIView):
    serializer_class = OrderSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return OrderLedger().list_for_account(self.request.user)


class MyCoursesView(generics.ListAPIView):
    serializer_class = CourseSummarySerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return EntitlementStore().owned_courses(self.request.user).order_by("title")
