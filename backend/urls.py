"""
Root URL configuration.

- /admin/         Django admin (operator review of orders)
- /api/           Marketplace API (auth, cart, courses, orders)
- /api/orders/    Checkout issuance and payment webhook (Stripe)
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/orders/", include("core.stripe_integration.urls")),
    path("api/", include("elearning.urls")),
]
