from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(help_text="Unique name for this course category", max_length=100, unique=True, verbose_name="Category Name")),
            ],
            options={
                "verbose_name": "Course Category",
                "verbose_name_plural": "Course Categories",
                "db_table": "elearning_category",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Course",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=100, verbose_name="Course Title")),
                ("slug", models.SlugField(blank=True, help_text="Generated from the title when left empty", max_length=120, unique=True, verbose_name="Slug")),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                ("price", models.DecimalField(decimal_places=2, help_text="Current catalog price", max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal("0.00"))], verbose_name="Price")),
                ("published", models.BooleanField(default=True, help_text="Unpublished courses cannot be added to carts or purchased", verbose_name="Published")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("category", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="courses", to="elearning.category", verbose_name="Category")),
                ("instructor", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="authored_courses", to=settings.AUTH_USER_MODEL, verbose_name="Instructor")),
            ],
            options={
                "verbose_name": "Course",
                "verbose_name_plural": "Courses",
                "db_table": "elearning_course",
                "ordering": ["title"],
            },
        ),
        migrations.CreateModel(
            name="CourseModule",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255, verbose_name="Module Title")),
                ("order", models.PositiveIntegerField(default=0, help_text="Order of modules within the course (0 = first)", verbose_name="Display Order")),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="modules", to="elearning.course", verbose_name="Course")),
            ],
            options={
                "verbose_name": "Course Module",
                "verbose_name_plural": "Course Modules",
                "db_table": "elearning_course_module",
                "ordering": ["course", "order", "title"],
            },
        ),
        migrations.CreateModel(
            name="Lesson",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255, verbose_name="Lesson Title")),
                ("lesson_type", models.CharField(choices=[("video", "Video"), ("quiz", "Quiz")], default="video", max_length=10, verbose_name="Lesson Type")),
                ("content", models.JSONField(blank=True, default=dict, verbose_name="Content")),
                ("order", models.PositiveIntegerField(default=0, verbose_name="Display Order")),
                ("module", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="lessons", to="elearning.coursemodule", verbose_name="Module")),
            ],
            options={
                "verbose_name": "Lesson",
                "verbose_name_plural": "Lessons",
                "db_table": "elearning_lesson",
                "ordering": ["module", "order", "title"],
            },
        ),
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("role", models.CharField(choices=[("learner", "Learner"), ("author", "Author"), ("administrator", "Administrator")], default="learner", help_text="Role of the account within the marketplace", max_length=20, verbose_name="Role")),
                ("user", models.OneToOneField(help_text="Associated user account", on_delete=django.db.models.deletion.CASCADE, related_name="profile", to=settings.AUTH_USER_MODEL, verbose_name="User")),
            ],
            options={
                "verbose_name": "User Profile",
                "verbose_name_plural": "User Profiles",
                "db_table": "elearning_profile",
            },
        ),
        migrations.CreateModel(
            name="Cart",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="cart", to=settings.AUTH_USER_MODEL, verbose_name="User")),
            ],
            options={
                "verbose_name": "Cart",
                "verbose_name_plural": "Carts",
                "db_table": "elearning_cart",
            },
        ),
        migrations.CreateModel(
            name="CartItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("price", models.DecimalField(decimal_places=2, help_text="Catalog price at the time the course was added", max_digits=10, verbose_name="Price Snapshot")),
                ("added_at", models.DateTimeField(auto_now_add=True, verbose_name="Added At")),
                ("cart", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="items", to="elearning.cart", verbose_name="Cart")),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="cart_items", to="elearning.course", verbose_name="Course")),
            ],
            options={
                "verbose_name": "Cart Item",
                "verbose_name_plural": "Cart Items",
                "db_table": "elearning_cart_item",
                "ordering": ["added_at", "id"],
                "unique_together": {("cart", "course")},
            },
        ),
        migrations.CreateModel(
            name="CourseEnrollment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("source", models.CharField(default="manual", help_text="How access was granted", max_length=50, verbose_name="Source")),
                ("reference", models.CharField(blank=True, default="", help_text="Payment reference that granted access", max_length=255, verbose_name="Reference")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Granted At")),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="enrollments", to="elearning.course", verbose_name="Course")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="enrollments", to=settings.AUTH_USER_MODEL, verbose_name="User")),
            ],
            options={
                "verbose_name": "Course Enrollment",
                "verbose_name_plural": "Course Enrollments",
                "db_table": "elearning_course_enrollment",
                "ordering": ["user", "-created_at"],
                "unique_together": {("user", "course")},
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(choices=[("completed", "Completed"), ("failed", "Failed"), ("refunded", "Refunded")], max_length=20, verbose_name="Status")),
                ("total_amount", models.DecimalField(decimal_places=2, help_text="Amount captured by the payment provider", max_digits=12, verbose_name="Total Amount")),
                ("currency", models.CharField(max_length=3, verbose_name="Currency")),
                ("payment_reference", models.CharField(help_text="Checkout session id at the payment provider", max_length=255, unique=True, verbose_name="Payment Reference")),
                ("payment_intent_id", models.CharField(blank=True, default="", max_length=255, verbose_name="Payment Intent")),
                ("customer_email", models.EmailField(blank=True, default="", max_length=254, verbose_name="Customer Email")),
                ("failure_reason", models.TextField(blank=True, default="", help_text="Why fulfillment failed; set for failed orders only", verbose_name="Failure Reason")),
                ("requested_course_ids", models.JSONField(blank=True, default=list, verbose_name="Requested Course IDs")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="orders", to=settings.AUTH_USER_MODEL, verbose_name="User")),
            ],
            options={
                "verbose_name": "Order",
                "verbose_name_plural": "Orders",
                "db_table": "elearning_order",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("course_title", models.CharField(max_length=100, verbose_name="Course Title")),
                ("price", models.DecimalField(decimal_places=2, max_digits=10, verbose_name="Price At Purchase")),
                ("course", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="order_items", to="elearning.course", verbose_name="Course")),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="items", to="elearning.order", verbose_name="Order")),
            ],
            options={
                "verbose_name": "Order Item",
                "verbose_name_plural": "Order Items",
                "db_table": "elearning_order_item",
                "ordering": ["order", "id"],
            },
        ),
    ]
