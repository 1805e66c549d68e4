import unittest
from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

from prayerboard.db import (
    DuplicateRecordError,
    InMemoryDbClient,
    MissingParentError,
    SqlDbClient,
    day_of_year,
)
from prayerboard.inspirations import seed_inspirations


def _ticks(start=datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)):
    current = start
    while True:
        yield current
        current += timedelta(seconds=1)


class DbClientContract:
    """Behaviour both storage clients must share. Mixed into TestCases below."""

    def make_client(self):
        raise NotImplementedError

    def setUp(self):
        self.db = self.make_client()

    def test_create_prayer_defaults(self):
        prayer = self.db.create_prayer("Please pray for my family this week")
        self.assertTrue(prayer.id)
        self.assertEqual(prayer.category, "Other")
        self.assertTrue(prayer.is_moderated)
        self.assertEqual(prayer.lift_up_count, 0)
        self.assertTrue(prayer.is_anonymous)
        self.assertIsNone(prayer.author_name)

        fetched = self.db.get_prayer(prayer.id)
        self.assertEqual(fetched.content, prayer.content)
        self.assertEqual(fetched.created_at, prayer.created_at)

    def test_author_name_drives_anonymity(self):
        named = self.db.create_prayer(
            "Praying for a new job soon", category="Work", author_name="Sam"
        )
        blank = self.db.create_prayer(
            "Praying for a new job soon", author_name="   "
        )
        self.assertFalse(named.is_anonymous)
        self.assertEqual(named.author_name, "Sam")
        self.assertEqual(named.category, "Work")
        self.assertTrue(blank.is_anonymous)
        self.assertIsNone(blank.author_name)

    def test_get_missing_prayer_returns_none(self):
        self.assertIsNone(self.db.get_prayer("nope"))
        self.assertIsNone(self.db.get_question("nope"))

    def test_list_prayers_newest_first(self):
        with patch("prayerboard.db._utcnow", side_effect=_ticks()):
            first = self.db.create_prayer("First prayer request")
            second = self.db.create_prayer("Second prayer request")
            third = self.db.create_prayer("Third prayer request")
        ids = [p.id for p in self.db.list_prayers()]
        self.assertEqual(ids, [third.id, second.id, first.id])

    def test_list_questions_newest_first(self):
        with patch("prayerboard.db._utcnow", side_effect=_ticks()):
            older = self.db.create_question("Older", "What does grace mean?")
            newer = self.db.create_question("Newer", "How should I pray daily?")
        ids = [q.id for q in self.db.list_questions()]
        self.assertEqual(ids, [newer.id, older.id])

    def test_equal_timestamps_order_by_id(self):
        fixed = datetime(2025, 3, 1, tzinfo=timezone.utc)
        with patch("prayerboard.db._utcnow", return_value=fixed):
            prayers = [self.db.create_prayer(f"Prayer request {n}") for n in range(4)]
            for prayer in prayers:
                self.db.create_prayer_comment(prayers[0].id, "Praying")
                self.db.create_bookmark(prayer.id, "session-a")
        prayer_ids = sorted((p.id for p in prayers), reverse=True)

        self.assertEqual([p.id for p in self.db.list_prayers()], prayer_ids)

        bookmarks = self.db.list_bookmarks_by_session("session-a")
        bookmark_ids = [b.id for b in bookmarks]
        self.assertEqual(bookmark_ids, sorted(bookmark_ids, reverse=True))
        self.assertEqual(
            [p.id for p in self.db.list_bookmarked_prayers("session-a")],
            [b.prayer_id for b in bookmarks],
        )

        comment_ids = [c.id for c in self.db.list_comments_by_prayer(prayers[0].id)]
        self.assertEqual(comment_ids, sorted(comment_ids))

    def test_prayer_comments_oldest_first(self):
        prayer = self.db.create_prayer("Healing for my friend")
        other = self.db.create_prayer("Strength for exams")
        with patch("prayerboard.db._utcnow", side_effect=_ticks()):
            c1 = self.db.create_prayer_comment(prayer.id, "Praying!")
            c2 = self.db.create_prayer_comment(prayer.id, "Amen", author_name="Ann")
            self.db.create_prayer_comment(other.id, "Good luck")
        comments = self.db.list_comments_by_prayer(prayer.id)
        self.assertEqual([c.id for c in comments], [c1.id, c2.id])
        self.assertFalse(comments[1].is_anonymous)
        self.assertEqual(comments[1].prayer_id, prayer.id)

    def test_question_comments_oldest_first(self):
        question = self.db.create_question("Fasting", "How do people fast well?")
        with patch("prayerboard.db._utcnow", side_effect=_ticks()):
            c1 = self.db.create_comment(question.id, "Start small")
            c2 = self.db.create_comment(question.id, "Drink water")
        comments = self.db.list_comments_by_question(question.id)
        self.assertEqual([c.id for c in comments], [c1.id, c2.id])
        self.assertEqual(self.db.list_comments_by_question("missing"), [])

    def test_comment_on_missing_parent_is_rejected(self):
        with self.assertRaises(MissingParentError):
            self.db.create_comment("missing", "Hello")
        with self.assertRaises(MissingParentError):
            self.db.create_prayer_comment("missing", "Hello")

    def test_lift_up_is_once_per_session(self):
        prayer = self.db.create_prayer("Peace for our town")
        self.assertFalse(self.db.has_lifted_up(prayer.id, "session-a"))

        self.db.record_lift_up(prayer.id, "session-a")
        self.assertTrue(self.db.has_lifted_up(prayer.id, "session-a"))
        self.assertEqual(self.db.count_lift_ups(prayer.id), 1)

        with self.assertRaises(DuplicateRecordError):
            self.db.record_lift_up(prayer.id, "session-a")
        self.assertEqual(self.db.count_lift_ups(prayer.id), 1)

        self.db.record_lift_up(prayer.id, "session-b")
        self.assertEqual(self.db.count_lift_ups(prayer.id), 2)

    def test_lift_up_count_is_set_not_incremented(self):
        prayer = self.db.create_prayer("Comfort for a grieving family")
        self.db.update_prayer_lift_up_count(prayer.id, 5)
        self.db.update_prayer_lift_up_count(prayer.id, 3)
        self.assertEqual(self.db.get_prayer(prayer.id).lift_up_count, 3)
        # Unknown ids are ignored.
        self.db.update_prayer_lift_up_count("missing", 1)

    def test_lift_up_for_missing_prayer(self):
        with self.assertRaises(MissingParentError):
            self.db.record_lift_up("missing", "session-a")

    def test_bookmark_round_trip(self):
        prayer = self.db.create_prayer("Guidance for a big decision")
        bookmark = self.db.create_bookmark(prayer.id, "session-a")
        self.assertEqual(bookmark.prayer_id, prayer.id)
        self.assertEqual(bookmark.session_id, "session-a")
        self.assertTrue(self.db.has_bookmark(prayer.id, "session-a"))
        self.assertFalse(self.db.has_bookmark(prayer.id, "session-b"))

        self.db.delete_bookmark(prayer.id, "session-a")
        self.assertFalse(self.db.has_bookmark(prayer.id, "session-a"))
        # Deleting again is a no-op.
        self.db.delete_bookmark(prayer.id, "session-a")

    def test_duplicate_bookmark_is_rejected(self):
        prayer = self.db.create_prayer("Guidance for a big decision")
        self.db.create_bookmark(prayer.id, "session-a")
        with self.assertRaises(DuplicateRecordError):
            self.db.create_bookmark(prayer.id, "session-a")
        self.assertEqual(len(self.db.list_bookmarks_by_session("session-a")), 1)

    def test_bookmarked_prayers_by_bookmark_time(self):
        with patch("prayerboard.db._utcnow", side_effect=_ticks()):
            older = self.db.create_prayer("Older prayer request")
            newer = self.db.create_prayer("Newer prayer request")
            self.db.create_bookmark(newer.id, "session-a")
            self.db.create_bookmark(older.id, "session-a")
            self.db.create_bookmark(newer.id, "session-b")
        prayers = self.db.list_bookmarked_prayers("session-a")
        self.assertEqual([p.id for p in prayers], [older.id, newer.id])
        self.assertEqual(self.db.list_bookmarked_prayers("nobody"), [])

    def test_daily_inspiration_empty(self):
        self.assertIsNone(self.db.get_daily_inspiration(date(2025, 1, 1)))

    def test_daily_inspiration_rotates_by_day(self):
        seed_inspirations(self.db)
        inspirations = self.db.list_inspirations()
        self.assertEqual(len(inspirations), 7)

        day_one = self.db.get_daily_inspiration(date(2025, 1, 1))
        day_eight = self.db.get_daily_inspiration(date(2025, 1, 8))
        self.assertEqual(day_one, day_eight)
        self.assertEqual(day_one, inspirations[1])
        self.assertEqual(
            self.db.get_daily_inspiration(date(2025, 1, 2)), inspirations[2]
        )

    def test_daily_inspiration_same_day_same_entry(self):
        seed_inspirations(self.db)
        self.assertEqual(
            self.db.get_daily_inspiration(), self.db.get_daily_inspiration()
        )

    def test_count_records(self):
        prayer = self.db.create_prayer("Safe travels for my parents")
        question = self.db.create_question("Hope", "Where do you find hope?")
        self.db.create_prayer_comment(prayer.id, "Praying")
        self.db.create_comment(question.id, "In scripture")
        self.db.create_comment(question.id, "In friends")
        self.db.create_bookmark(prayer.id, "s1")
        self.db.record_lift_up(prayer.id, "s1")
        self.db.create_inspiration("Be still.", "Psalm 46:10", "verse")

        self.assertEqual(
            self.db.count_records(),
            {
                "prayers": 1,
                "questions": 1,
                "prayerComments": 1,
                "questionComments": 2,
                "bookmarks": 1,
                "liftUps": 1,
                "inspirations": 1,
            },
        )

    def test_ping(self):
        self.assertTrue(self.db.ping())


class InMemoryDbClientTests(DbClientContract, unittest.TestCase):
    def make_client(self):
        return InMemoryDbClient()

    def test_reset_clears_everything(self):
        prayer = self.db.create_prayer("Rest for the weary")
        self.db.record_lift_up(prayer.id, "s1")
        seed_inspirations(self.db)
        self.db.reset()
        self.assertEqual(self.db.list_prayers(), [])
        self.assertEqual(self.db.count_lift_ups(prayer.id), 0)
        self.assertEqual(self.db.list_inspirations(), [])
        self.assertEqual(self.db.create_inspiration("a", "b", "thought").id, "1")


class SqlDbClientTests(DbClientContract, unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the SQL client logic.
    """

    def make_client(self):
        return SqlDbClient("sqlite+pysqlite:///:memory:")

    def test_requires_url(self):
        with self.assertRaises(ValueError):
            SqlDbClient("")

    def test_storage_name_reports_dialect(self):
        self.assertEqual(self.db.storage_name, "sqlite")

    def test_timestamps_are_timezone_aware(self):
        prayer = self.db.create_prayer("Patience with my children")
        listed = self.db.list_prayers()[0]
        self.assertIsNotNone(listed.created_at.tzinfo)
        self.assertEqual(listed.created_at, prayer.created_at)

    def test_inspiration_ids_follow_insertion_order(self):
        first = self.db.create_inspiration("One", "A", "verse")
        second = self.db.create_inspiration("Two", "B", "quote")
        self.assertEqual(
            [i.id for i in self.db.list_inspirations()], [first.id, second.id]
        )


class DayOfYearTests(unittest.TestCase):
    def test_january_first_is_day_one(self):
        self.assertEqual(day_of_year(date(2025, 1, 1)), 1)

    def test_leap_year_end(self):
        self.assertEqual(day_of_year(date(2024, 12, 31)), 366)


if __name__ == "__main__":
    unittest.main()
