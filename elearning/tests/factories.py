"""
Shared fixtures for the marketplace tests.

`signed_webhook` builds a Stripe-compatible `Stripe-Signature` header
(`t=<timestamp>,v1=<hex hmac-sha256 of "<t>.<body>">`) so the real
`stripe.WebhookSignature` verification runs in the tests.
"""

import hashlib
import hmac
import json
import time
from decimal import Decimal

from django.contrib.auth.models import User

from elearning.courses.models import Category, Course, CourseModule, Lesson

WEBHOOK_SECRET = "whsec_test_secret"


def make_user(username="learner", password="Musterpassword", **extra):
    extra.setdefault("email", f"{username}@test.com")
    return User.objects.create_user(username=username, password=password, **extra)


def make_course(title, price, published=True, instructor=None, category=None):
    if instructor is None:
        instructor, _ = User.objects.get_or_create(username="instructor")
    if category is None:
        category, _ = Category.objects.get_or_create(name="Python")
    return Course.objects.create(
        title=title,
        price=Decimal(price),
        published=published,
        instructor=instructor,
        category=category,
    )


def add_content(course):
    module = CourseModule.objects.create(course=course, title="Kapitel 1", order=1)
    Lesson.objects.create(module=module, title="Intro", order=2, content={"video_url": "https://v/1.mp4"})
    Lesson.objects.create(
        module=module,
        title="Quiz",
        order=3,
        lesson_type=Lesson.LessonType.QUIZ,
        content={"questions": []},
    )
    return module


def checkout_session_event(
    session_id,
    user,
    course_ids,
    amount_total,
    event_type="checkout.session.completed",
    payment_status="paid",
    currency="eur",
    metadata=None,
):
    if metadata is None:
        metadata = {
            "intent_version": "1",
            "account_id": str(user.pk),
            "course_ids": ",".join(str(course_id) for course_id in course_ids),
            "email": user.email,
        }
    return {
        "id": f"evt_{session_id}",
        "object": "event",
        "type": event_type,
        "data": {
            "object": {
                "id": session_id,
                "object": "checkout.session",
                "amount_total": amount_total,
                "currency": currency,
                "payment_status": payment_status,
                "payment_intent": f"pi_{session_id}",
                "customer_details": {"email": user.email if user else ""},
                "metadata": metadata,
            }
        },
    }


def signed_webhook(event, secret=WEBHOOK_SECRET, timestamp=None):
    """Return `(body, signature_header)` for `event`."""
    body = json.dumps(event)
    return body, sign_body(body, secret, timestamp)


def sign_body(body, secret=WEBHOOK_SECRET, timestamp=None):
    timestamp = int(time.time()) if timestamp is None else timestamp
    signature = hmac.new(
        secret.encode("utf-8"),
        f"{timestamp}.{body}".encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return f"t={timestamp},v1={signature}"
