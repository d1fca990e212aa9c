"""
Access Gate

Answers "does account X own course Y" for content-serving views. Every
collaborator that delivers paid content checks it first and rejects with
`Forbidden` when it returns False.
"""

from rest_framework.permissions import BasePermission

from ..exceptions import Forbidden
from .store import EntitlementStore


def has_access(user, course_id) -> bool:
    """True iff the course is in the account's entitlement set."""
    if not user or not user.is_authenticated:
        return False
    try:
        course_id = int(course_id)
    except (TypeError, ValueError):
        return False
    return EntitlementStore().owns(user, course_id)


class HasCourseAccess(BasePermission):
    """
    Erlaubt Zugriff nur, wenn der Account den Kurs besitzt.

    Checked against the course object, so a missing course surfaces as 404
    from `get_object` before ownership is looked at.
    """

    def has_object_permission(self, request, view, obj):
        if not has_access(request.user, obj.pk):
            raise Forbidden("You do not have access to this course.")
        return True
