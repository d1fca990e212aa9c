from django.db.models import Prefetch
from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions

from ..enrollments.access import HasCourseAccess
from .models import Course, CourseModule, Lesson
from .serializers import CourseContentSerializer


class CourseContentView(generics.RetrieveAPIView):
    """
    Content of a purchased course (modules with their lessons).

    403 unless the caller owns the course; 404 if the course is gone.
    """

    serializer_class = CourseContentSerializer
    permission_classes = [permissions.IsAuthenticated, HasCourseAccess]

    def get_object(self):
        queryset = Course.objects.select_related("category").prefetch_related(
            Prefetch(
                "modules",
                queryset=CourseModule.objects.order_by("order", "id").prefetch_related(
                    Prefetch("lessons", queryset=Lesson.objects.order_by("order", "id"))
                ),
            )
        )
        course = get_object_or_404(queryset, pk=self.kwargs["course_id"])
        self.check_object_permissions(self.request, course)
        return course
