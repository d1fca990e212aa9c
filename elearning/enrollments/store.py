"""
Entitlement Store

Persisted mapping account -> set of owned course ids. The only mutation is a
set-union (`grant`), which is commutative and safe to re-apply, so concurrent
or repeated reconciliation never needs a lock.
"""

import logging
from typing import Iterable, Set

from django.db.models import QuerySet

from ..courses.models import Course
from .models import CourseEnrollment

logger = logging.getLogger(__name__)


class EntitlementStore:
    """Read and grow the set of courses an account owns."""

    def grant(self, user, course_ids: Iterable[int], *, source: str, reference: str = "") -> int:
        """
        Add every course id to the account's owned set.

        Returns:
            Number of entitlements newly created (0 when all were owned already)
        """
        created_count = 0
        for course_id in course_ids:
            _, created = CourseEnrollment.objects.get_or_create(
                user=user,
                course_id=course_id,
                defaults={"source": source, "reference": reference},
            )
            if created:
                created_count += 1
                logger.info(
                    "Enrolled user %s into course %s (source=%s, ref=%s).",
                    user.pk, course_id, source, reference,
                )
            else:
                logger.info("Enrollment already exists for user %s and course %s.", user.pk, course_id)
        return created_count

    def course_ids_for(self, user) -> Set[int]:
        return set(
            CourseEnrollment.objects.filter(user=user).values_list("course_id", flat=True)
        )

    def owned_courses(self, user) -> QuerySet[Course]:
        return Course.objects.filter(enrollments__user=user).select_related(
            "category", "instructor"
        ).distinct()

    def owns(self, user, course_id: int) -> bool:
        return CourseEnrollment.objects.filter(user=user, course_id=course_id).exists()
