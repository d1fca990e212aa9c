import logging
from decimal import Decimal

from django.contrib.auth.models import User
from django.core.management.base import BaseCommand
from django.db import transaction

from ...models import Category, Course, CourseModule, Lesson, Profile

logger = logging.getLogger(__name__)

AUTHOR_USERNAME = "demo_author"

# Titel -> (Kategorie, Preis)
DEMO_COURSES = {
    "Python Grundlagen": ("Python", Decimal("50.00")),
    "Django REST Framework": ("Python", Decimal("30.00")),
    "JavaScript für Einsteiger": ("Web Development", Decimal("25.00")),
    "React in der Praxis": ("Web Development", Decimal("45.00")),
    "SQL Basics": ("Datenbanken", Decimal("19.99")),
    "Docker kompakt": ("DevOps", Decimal("0.00")),
}

MODULES_PER_COURSE = 3
LESSONS_PER_MODULE = 2


class Command(BaseCommand):
    help = "Seeds the catalog with demo categories, courses, modules and lessons."

    def add_arguments(self, parser):
        parser.add_argument(
            "--clean",
            action="store_true",
            help="Delete demo courses (and their content) before seeding.",
        )

    def _get_author(self):
        author, created = User.objects.get_or_create(
            username=AUTHOR_USERNAME,
            defaults={"email": "author@example.com", "first_name": "Demo", "last_name": "Author"},
        )
        if created:
            author.set_unusable_password()
            author.save()
            self.stdout.write(f"Autor angelegt: {author.username}")
        Profile.objects.filter(user=author).update(role=Profile.Role.AUTHOR)
        return author

    def _create_content(self, course):
        for module_index in range(1, MODULES_PER_COURSE + 1):
            module, _ = CourseModule.objects.get_or_create(
                course=course,
                order=module_index,
                defaults={"title": f"Kapitel {module_index}"},
            )
            for lesson_index in range(1, LESSONS_PER_MODULE + 1):
                is_quiz = lesson_index == LESSONS_PER_MODULE
                Lesson.objects.get_or_create(
                    module=module,
                    order=lesson_index,
                    defaults={
                        "title": f"{module.title}: {'Quiz' if is_quiz else 'Video'} {lesson_index}",
                        "lesson_type": Lesson.LessonType.QUIZ if is_quiz else Lesson.LessonType.VIDEO,
                        "content": (
                            {"questions": [{"question": "Alles verstanden?", "options": ["Ja", "Nein"], "answer": 0}]}
                            if is_quiz
                            else {"video_url": f"https://videos.example.com/{course.slug}/{module_index}-{lesson_index}.mp4"}
                        ),
                    },
                )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["clean"]:
            # Gekaufte Kurse (Enrollments) bleiben erhalten.
            deleted, _ = Course.objects.filter(
                title__in=DEMO_COURSES, enrollments__isnull=True
            ).delete()
            self.stdout.write(f"  - {deleted} Datensätze gelöscht.")

        author = self._get_author()
        created_count = 0
        for title, (category_name, price) in DEMO_COURSES.items():
            category, _ = Category.objects.get_or_create(name=category_name)
            course, created = Course.objects.get_or_create(
                title=title,
                defaults={
                    "description": f"Demo-Kurs: {title}",
                    "price": price,
                    "category": category,
                    "instructor": author,
                },
            )
            if created:
                created_count += 1
                self.stdout.write(self.style.SUCCESS(f'Kurs erstellt: "{title}" ({price})'))
            self._create_content(course)

        logger.info("Catalog seeded: %s new course(s).", created_count)
        self.stdout.write(self.style.SUCCESS(f"Seeding finished. {created_count} neue Kurse."))
