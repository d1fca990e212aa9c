"""
Course Catalog Models

This module defines the catalog the commerce flows reference by id. The
catalog is maintained by authors and administrators; the cart, checkout and
reconciliation code only reads it.

Models:
- Category: Organizational categories for courses
- Course: Purchasable course with a catalog price and publish flag
- CourseModule: Ordered sections within a course
- Lesson: Ordered video or quiz lessons within a module

Author: Marketplace Development Team
Version: 1.0.0
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import QuerySet
from django.utils.text import slugify
from django.utils.translation import gettext_lazy as _


class Category(models.Model):
    """
    Organizational category for courses.

    Example:
        >>> category = Category.objects.create(name="Web Development")
    """

    name = models.CharField(
        max_length=100,
        unique=True,
        verbose_name=_("Category Name"),
        help_text=_("Unique name for this course category"),
    )

    def __str__(self) -> str:
        return self.name

    class Meta:
        verbose_name = _("Course Category")
        verbose_name_plural = _("Course Categories")
        ordering = ["name"]
        db_table = "elearning_category"


class CourseQuerySet(models.QuerySet):
    def published(self) -> QuerySet["Course"]:
        return self.filter(published=True)


class Course(models.Model):
    """
    A purchasable course.

    Attributes:
        title: Course title
        slug: URL slug derived from the title
        description: Long description
        price: Current catalog price in major currency units
        published: Only published courses can be added to carts or bought
        instructor: Authoring account
        category: Associated category

    The price is a live value. Carts snapshot it at add-time; checkout always
    re-reads it.
    """

    title = models.CharField(
        max_length=100,
        verbose_name=_("Course Title"),
    )

    slug = models.SlugField(
        max_length=120,
        unique=True,
        blank=True,
        verbose_name=_("Slug"),
        help_text=_("Generated from the title when left empty"),
    )

    description = models.TextField(
        blank=True,
        verbose_name=_("Description"),
    )

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        verbose_name=_("Price"),
        help_text=_("Current catalog price"),
    )

    published = models.BooleanField(
        default=True,
        verbose_name=_("Published"),
        help_text=_("Unpublished courses cannot be added to carts or purchased"),
    )

    instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="authored_courses",
        verbose_name=_("Instructor"),
    )

    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="courses",
        verbose_name=_("Category"),
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("Created At"))

    objects = CourseQuerySet.as_manager()

    def __str__(self) -> str:
        return self.title

    class Meta:
        verbose_name = _("Course")
        verbose_name_plural = _("Courses")
        ordering = ["title"]
        db_table = "elearning_course"

    def save(self, *args, **kwargs) -> None:
        if not self.slug:
            self.slug = self._unique_slug()
        super().save(*args, **kwargs)

    def _unique_slug(self) -> str:
        base = slugify(self.title)[:100] or "course"
        candidate = base
        suffix = 2
        while Course.objects.filter(slug=candidate).exclude(pk=self.pk).exists():
            candidate = f"{base}-{suffix}"
            suffix += 1
        return candidate


class CourseModule(models.Model):
    """Ordered section of a course."""

    course = models.ForeignKey(
        Course,
        related_name="modules",
        on_delete=models.CASCADE,
        verbose_name=_("Course"),
    )

    title = models.CharField(max_length=255, verbose_name=_("Module Title"))

    order = models.PositiveIntegerField(
        default=0,
        verbose_name=_("Display Order"),
        help_text=_("Order of modules within the course (0 = first)"),
    )

    def __str__(self) -> str:
        return f"{self.course.title} - {self.title}"

    class Meta:
        verbose_name = _("Course Module")
        verbose_name_plural = _("Course Modules")
        ordering = ["course", "order", "title"]
        db_table = "elearning_course_module"


class Lesson(models.Model):
    """
    Single lesson within a course module.

    `content` is free-form: a video lesson stores e.g. `{"video_url": ...}`,
    a quiz stores its questions and options.
    """

    class LessonType(models.TextChoices):
        VIDEO = "video", _("Video")
        QUIZ = "quiz", _("Quiz")

    module = models.ForeignKey(
        CourseModule,
        related_name="lessons",
        on_delete=models.CASCADE,
        verbose_name=_("Module"),
    )

    title = models.CharField(max_length=255, verbose_name=_("Lesson Title"))

    lesson_type = models.CharField(
        max_length=10,
        choices=LessonType.choices,
        default=LessonType.VIDEO,
        verbose_name=_("Lesson Type"),
    )

    content = models.JSONField(default=dict, blank=True, verbose_name=_("Content"))

    order = models.PositiveIntegerField(default=0, verbose_name=_("Display Order"))

    def __str__(self) -> str:
        return f"{self.module.title} - {self.title}"

    class Meta:
        verbose_name = _("Lesson")
        verbose_name_plural = _("Lessons")
        ordering = ["module", "order", "title"]
        db_table = "elearning_lesson"
