import unittest

from pydantic import ValidationError

from prayerboard.db import PrayerRecord
from prayerboard.schemas import (
    CommentCreate,
    LiftUpCreate,
    Prayer,
    PrayerCreate,
    QuestionCreate,
    is_anonymous_author,
)


def _first_message(exc: ValidationError) -> str:
    return exc.errors()[0]["msg"]


class SchemaTests(unittest.TestCase):
    def test_prayer_defaults_to_other_category(self):
        payload = PrayerCreate.model_validate({"content": "Pray for rain please"})
        self.assertEqual(payload.category, "Other")
        self.assertIsNone(payload.author_name)

    def test_prayer_accepts_camel_case_author(self):
        payload = PrayerCreate.model_validate(
            {"content": "Pray for rain please", "category": "Faith", "authorName": "Jo"}
        )
        self.assertEqual(payload.author_name, "Jo")
        self.assertEqual(payload.category, "Faith")

    def test_unknown_category_is_rejected(self):
        with self.assertRaises(ValidationError):
            PrayerCreate.model_validate(
                {"content": "Pray for rain please", "category": "Weather"}
            )

    def test_prayer_length_messages(self):
        with self.assertRaises(ValidationError) as ctx:
            PrayerCreate.model_validate({"content": "short"})
        self.assertEqual(
            _first_message(ctx.exception), "Prayer must be at least 10 characters"
        )

        with self.assertRaises(ValidationError) as ctx:
            PrayerCreate.model_validate({"content": "x" * 1001})
        self.assertEqual(
            _first_message(ctx.exception), "Prayer must be less than 1000 characters"
        )

    def test_prayer_length_bounds_are_inclusive(self):
        PrayerCreate.model_validate({"content": "x" * 10})
        PrayerCreate.model_validate({"content": "x" * 1000})

    def test_only_first_violation_is_reported_first(self):
        with self.assertRaises(ValidationError) as ctx:
            QuestionCreate.model_validate({"title": "Hi", "content": "short"})
        self.assertEqual(
            _first_message(ctx.exception), "Title must be at least 5 characters"
        )

    def test_author_name_limit(self):
        with self.assertRaises(ValidationError) as ctx:
            CommentCreate.model_validate({"content": "Amen", "authorName": "n" * 101})
        self.assertEqual(
            _first_message(ctx.exception), "Name must be less than 100 characters"
        )

    def test_empty_comment_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            CommentCreate.model_validate({"content": ""})
        self.assertEqual(_first_message(ctx.exception), "Comment cannot be empty")

    def test_client_cannot_set_anonymity(self):
        payload = PrayerCreate.model_validate(
            {"content": "Pray for rain please", "isAnonymous": False}
        )
        self.assertFalse(hasattr(payload, "is_anonymous"))

    def test_session_scoped_ids_required(self):
        with self.assertRaises(ValidationError) as ctx:
            LiftUpCreate.model_validate({"prayerId": "p1", "sessionId": ""})
        self.assertEqual(_first_message(ctx.exception), "Session ID required")

    def test_is_anonymous_author(self):
        self.assertTrue(is_anonymous_author(None))
        self.assertTrue(is_anonymous_author(""))
        self.assertTrue(is_anonymous_author("  \t"))
        self.assertFalse(is_anonymous_author("Sam"))

    def test_response_serializes_camel_case(self):
        record = PrayerRecord(id="abc", content="Pray for rain please")
        dumped = Prayer.model_validate(record).model_dump(by_alias=True)
        self.assertEqual(dumped["liftUpCount"], 0)
        self.assertTrue(dumped["isAnonymous"])
        self.assertTrue(dumped["isModerated"])
        self.assertIn("createdAt", dumped)


if __name__ == "__main__":
    unittest.main()
