"""
Entitlement Models

`CourseEnrollment` is the persisted set of courses an account owns. Rows are
only ever added (by payment reconciliation or by an administrator); no code
path in the application removes them.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from ..courses.models import Course


class CourseEnrollment(models.Model):
    """
    Ownership of one course by one account.

    Attributes:
        user: Owning account
        course: Owned course
        source: How the entitlement was granted (e.g. "stripe_checkout")
        reference: External reference of the grant (payment reference)
        created_at: Timestamp of the grant

    The unique constraint on (user, course) gives set semantics: granting an
    owned course again is a no-op.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="enrollments",
        verbose_name=_("User"),
    )

    course = models.ForeignKey(
        Course,
        on_delete=models.PROTECT,
        related_name="enrollments",
        verbose_name=_("Course"),
    )

    source = models.CharField(
        max_length=50,
        default="manual",
        verbose_name=_("Source"),
        help_text=_("How access was granted"),
    )

    reference = models.CharField(
        max_length=255,
        blank=True,
        default="",
        verbose_name=_("Reference"),
        help_text=_("Payment reference that granted access"),
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("Granted At"))

    def __str__(self) -> str:
        return f"{self.user.username} owns {self.course.title}"

    class Meta:
        verbose_name = _("Course Enrollment")
        verbose_name_plural = _("Course Enrollments")
        unique_together = ("user", "course")
        ordering = ["user", "-created_at"]
        db_table = "elearning_course_enrollment"
