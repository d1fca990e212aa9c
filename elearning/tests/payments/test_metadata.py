from django.test import SimpleTestCase

from core.stripe_integration.metadata import CheckoutMetadata
from elearning.exceptions import InvalidMetadata, InvalidRequest


def bag(**overrides):
    values = {
        "intent_version": "1",
        "account_id": "17",
        "course_ids": "3,5,9",
        "email": "buyer@example.com",
    }
    values.update(overrides)
    return values


class CheckoutMetadataTests(SimpleTestCase):
    def test_to_provider(self):
        metadata = CheckoutMetadata(account_id=17, course_ids=(3, 5, 9), email="buyer@example.com")
        self.assertEqual(metadata.to_provider(), bag())

    def test_from_provider_keeps_order(self):
        metadata = CheckoutMetadata.from_provider(bag(course_ids="9,3,5"))
        self.assertEqual(metadata.account_id, 17)
        self.assertEqual(metadata.course_ids, (9, 3, 5))
        self.assertEqual(metadata.email, "buyer@example.com")

    def test_empty_email_is_allowed(self):
        self.assertEqual(CheckoutMetadata.from_provider(bag(email="")).email, "")

    def test_blank_email_is_left_out_of_the_bag(self):
        metadata = CheckoutMetadata(account_id=17, course_ids=(3,), email="")
        self.assertNotIn("email", metadata.to_provider())

    def test_bag_without_email(self):
        values = bag()
        del values["email"]
        metadata = CheckoutMetadata.from_provider(values)
        self.assertEqual(metadata.account_id, 17)
        self.assertEqual(metadata.email, "")

    def test_missing_bag(self):
        for value in (None, {}, "3,5"):
            with self.subTest(value=value), self.assertRaises(InvalidMetadata):
                CheckoutMetadata.from_provider(value)

    def test_missing_key(self):
        values = bag()
        del values["account_id"]
        with self.assertRaises(InvalidMetadata):
            CheckoutMetadata.from_provider(values)

    def test_extra_key(self):
        with self.assertRaises(InvalidMetadata):
            CheckoutMetadata.from_provider(bag(coupon="SUMMER"))

    def test_unknown_version(self):
        with self.assertRaises(InvalidMetadata):
            CheckoutMetadata.from_provider(bag(intent_version="2"))

    def test_malformed_ids(self):
        for raw in ("", "3,,5", "3, 5", "03", "0", "-1", "abc", "3;5"):
            with self.subTest(course_ids=raw), self.assertRaises(InvalidMetadata):
                CheckoutMetadata.from_provider(bag(course_ids=raw))

    def test_malformed_account_id(self):
        with self.assertRaises(InvalidMetadata):
            CheckoutMetadata.from_provider(bag(account_id="17a"))

    def test_duplicate_course_ids(self):
        with self.assertRaises(InvalidMetadata):
            CheckoutMetadata.from_provider(bag(course_ids="3,5,3"))

    def test_non_string_values(self):
        with self.assertRaises(InvalidMetadata):
            CheckoutMetadata.from_provider(bag(account_id=17))

    def test_too_many_courses_for_provider_limit(self):
        metadata = CheckoutMetadata(account_id=1, course_ids=tuple(range(1000, 1200)))
        with self.assertRaises(InvalidRequest):
            metadata.to_provider()
