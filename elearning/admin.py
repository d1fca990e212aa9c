"""
Marketplace Django Admin Configuration

The admin interface is organized into logical sections:
- User Management: user administration with role profile inline
- Catalog: categories, courses with modules and lessons
- Commerce: carts, enrollments and the order ledger

Failed orders (a paid checkout session that could not be fulfilled) land in
the order list with status `failed` and the failure reason; operators resolve
them here, e.g. by granting the enrollment manually or refunding in Stripe.

Author: Marketplace Development Team
Version: 1.0.0
"""

from typing import Optional

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.models import User
from django.db.models import QuerySet
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _

from .models import (
    Cart,
    CartItem,
    Category,
    Course,
    CourseEnrollment,
    CourseModule,
    Lesson,
    Order,
    OrderItem,
    Profile,
)

# --- User Management Administration ---


class ProfileInline(admin.StackedInline):
    model = Profile
    can_delete = False
    verbose_name_plural = "Profile Information"
    fk_name = "user"
    fields = ("role",)

    def get_extra(self, request: HttpRequest, obj: Optional[User] = None, **kwargs) -> int:
        """Return 0 extra forms since the profile is created automatically."""
        return 0


class UserAdmin(BaseUserAdmin):
    inlines = (ProfileInline,)
    list_display = ("username", "email", "first_name", "last_name", "is_staff", "is_active", "get_role")
    list_select_related = ("profile",)
    list_filter = ("is_staff", "is_superuser", "is_active", "profile__role")
    search_fields = ("username", "first_name", "last_name", "email")
    ordering = ("username",)

    @admin.display(description=_("Role"))
    def get_role(self, instance: User) -> Optional[str]:
        try:
            return instance.profile.get_role_display()
        except Profile.DoesNotExist:
            return None


admin.site.unregister(User)
admin.site.register(User, UserAdmin)

# --- Catalog Administration ---


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name",)
    search_fields = ("name",)


class CourseModuleInline(admin.TabularInline):
    model = CourseModule
    extra = 1
    fields = ("title", "order")
    ordering = ("order",)


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    """
    Catalog maintenance.

    Price changes only affect new cart lines and new checkout sessions; lines
    already in carts keep their snapshot.
    """

    list_display = ("title", "category", "price", "published", "instructor", "created_at")
    list_filter = ("published", "category")
    search_fields = ("title", "description")
    prepopulated_fields = {"slug": ("title",)}
    inlines = [CourseModuleInline]

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        return super().get_queryset(request).select_related("category", "instructor")


class LessonInline(admin.TabularInline):
    model = Lesson
    extra = 1
    fields = ("title", "lesson_type", "order")
    ordering = ("order",)


@admin.register(CourseModule)
class CourseModuleAdmin(admin.ModelAdmin):
    list_display = ("title", "course", "order")
    list_filter = ("course",)
    inlines = [LessonInline]


# --- Commerce Administration ---


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    fields = ("course", "price", "added_at")
    readonly_fields = ("added_at",)


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("user", "item_count", "updated_at")
    search_fields = ("user__username", "user__email")
    inlines = [CartItemInline]

    @admin.display(description=_("Items"))
    def item_count(self, obj: Cart) -> int:
        return obj.items.count()


@admin.register(CourseEnrollment)
class CourseEnrollmentAdmin(admin.ModelAdmin):
    list_display = ("user", "course", "source", "reference", "created_at")
    list_filter = ("source",)
    search_fields = ("user__username", "user__email", "course__title", "reference")
    raw_id_fields = ("user", "course")


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    fields = ("course", "course_title", "price")
    readonly_fields = fields


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Order ledger.

    Orders are written by the webhook reconciler only, so everything except
    the status is read-only.
    """

    list_display = (
        "id",
        "user",
        "status",
        "total_amount",
        "currency",
        "payment_reference",
        "created_at",
    )
    list_filter = ("status", "currency", "created_at")
    search_fields = ("payment_reference", "payment_intent_id", "customer_email", "user__username")
    readonly_fields = (
        "user",
        "total_amount",
        "currency",
        "payment_reference",
        "payment_intent_id",
        "customer_email",
        "failure_reason",
        "requested_course_ids",
        "created_at",
    )
    inlines = [OrderItemInline]
    date_hierarchy = "created_at"

    def has_add_permission(self, request: HttpRequest) -> bool:
        return False

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        return super().get_queryset(request).select_related("user")
