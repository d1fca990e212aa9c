from rest_framework import serializers

from .models import Category, Course, CourseModule, Lesson


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name"]


class CourseSummarySerializer(serializers.ModelSerializer):
    """Catalog view of a course, used in carts, orders and `my-courses`."""

    category = CategorySerializer(read_only=True)
    instructor = serializers.CharField(source="instructor.get_full_name", read_only=True)

    class Meta:
        model = Course
        fields = ["id", "title", "slug", "price", "published", "category", "instructor"]


class LessonSerializer(serializers.ModelSerializer):
    class Meta:
        model = Lesson
        fields = ["id", "title", "lesson_type", "content", "order"]


class CourseModuleSerializer(serializers.ModelSerializer):
    lessons = LessonSerializer(many=True, read_only=True)

    class Meta:
        model = CourseModule
        fields = ["id", "title", "order", "lessons"]


class CourseContentSerializer(serializers.ModelSerializer):
    """
    Full content tree of an owned course.

    Modules and lessons come out in display order (model Meta ordering).
    """

    category = CategorySerializer(read_only=True)
    modules = CourseModuleSerializer(many=True, read_only=True)

    class Meta:
        model = Course
        fields = ["id", "title", "slug", "description", "category", "modules"]
