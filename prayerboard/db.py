"""
Database abstraction for Postgres and an in-memory implementation.

Both clients satisfy `DbClient`; the app picks one when it is built and
never looks at which one it got afterwards.
"""

from __future__ import annotations

import itertools
import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Dict, Optional, Protocol, Sequence

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    create_engine,
    delete,
    event,
    func,
    select,
    text,
    update,
)
from sqlalchemy.engine import make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from prayerboard.schemas import DEFAULT_CATEGORY, is_anonymous_author

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base class for errors raised by storage clients."""


class DuplicateRecordError(StorageError):
    """A session tried to lift up or bookmark the same prayer twice."""


class MissingParentError(StorageError):
    """A child record referenced a prayer or question that does not exist."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


def _clean_author(author_name: Optional[str]) -> Optional[str]:
    return None if is_anonymous_author(author_name) else author_name


def day_of_year(today: date) -> int:
    """1-based day of the year (January 1st is day 1)."""
    return today.timetuple().tm_yday


def pick_daily_inspiration(
    inspirations: Sequence["InspirationRecord"], today: Optional[date] = None
) -> Optional["InspirationRecord"]:
    """
    Rotate through `inspirations` (already in stable id order) by calendar day.

    The same day always lands on the same entry for an unchanged set, and the
    rotation period equals the size of the set.
    """
    if not inspirations:
        return None
    today = today or date.today()
    return inspirations[day_of_year(today) % len(inspirations)]


class DbClient(Protocol):
    """Interface for database access."""

    storage_name: str

    # Prayers
    def create_prayer(
        self,
        content: str,
        category: str = DEFAULT_CATEGORY,
        author_name: Optional[str] = None,
    ) -> "PrayerRecord":
        ...

    def get_prayer(self, prayer_id: str) -> Optional["PrayerRecord"]:
        ...

    def list_prayers(self) -> list["PrayerRecord"]:
        ...

    def update_prayer_lift_up_count(self, prayer_id: str, count: int) -> None:
        ...

    # Questions and comments
    def create_question(
        self, title: str, content: str, author_name: Optional[str] = None
    ) -> "QuestionRecord":
        ...

    def get_question(self, question_id: str) -> Optional["QuestionRecord"]:
        ...

    def list_questions(self) -> list["QuestionRecord"]:
        ...

    def create_comment(
        self, question_id: str, content: str, author_name: Optional[str] = None
    ) -> "CommentRecord":
        ...

    def list_comments_by_question(self, question_id: str) -> list["CommentRecord"]:
        ...

    def create_prayer_comment(
        self, prayer_id: str, content: str, author_name: Optional[str] = None
    ) -> "PrayerCommentRecord":
        ...

    def list_comments_by_prayer(
        self, prayer_id: str
    ) -> list["PrayerCommentRecord"]:
        ...

    # Bookmarks
    def create_bookmark(self, prayer_id: str, session_id: str) -> "BookmarkRecord":
        ...

    def delete_bookmark(self, prayer_id: str, session_id: str) -> None:
        ...

    def has_bookmark(self, prayer_id: str, session_id: str) -> bool:
        ...

    def list_bookmarks_by_session(self, session_id: str) -> list["BookmarkRecord"]:
        ...

    def list_bookmarked_prayers(self, session_id: str) -> list["PrayerRecord"]:
        ...

    # Lift-ups
    def record_lift_up(self, prayer_id: str, session_id: str) -> "LiftUpRecord":
        ...

    def has_lifted_up(self, prayer_id: str, session_id: str) -> bool:
        ...

    def count_lift_ups(self, prayer_id: str) -> int:
        ...

    # Daily inspiration
    def create_inspiration(
        self, content: str, attribution: str, type: str
    ) -> "InspirationRecord":
        ...

    def list_inspirations(self) -> list["InspirationRecord"]:
        ...

    def get_daily_inspiration(
        self, today: Optional[date] = None
    ) -> Optional["InspirationRecord"]:
        ...

    # Monitoring
    def count_records(self) -> dict[str, int]:
        ...

    def ping(self) -> bool:
        ...


@dataclass
class PrayerRecord:
    id: str
    content: str
    category: str = DEFAULT_CATEGORY
    author_name: Optional[str] = None
    is_anonymous: bool = True
    lift_up_count: int = 0
    is_moderated: bool = True
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class QuestionRecord:
    id: str
    title: str
    content: str
    author_name: Optional[str] = None
    is_anonymous: bool = True
    is_moderated: bool = True
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class CommentRecord:
    id: str
    question_id: str
    content: str
    author_name: Optional[str] = None
    is_anonymous: bool = True
    is_moderated: bool = True
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class PrayerCommentRecord:
    id: str
    prayer_id: str
    content: str
    author_name: Optional[str] = None
    is_anonymous: bool = True
    is_moderated: bool = True
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class BookmarkRecord:
    id: str
    prayer_id: str
    session_id: str
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class LiftUpRecord:
    id: str
    prayer_id: str
    session_id: str
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class InspirationRecord:
    id: str
    content: str
    attribution: str
    type: str


# Equal timestamps fall back to id order, matching the SQL client's ORDER BY.
def _newest_first(records):
    return sorted(records, key=lambda r: (r.created_at, r.id), reverse=True)


def _oldest_first(records):
    return sorted(records, key=lambda r: (r.created_at, r.id))


def _has_pair(records, prayer_id: str, session_id: str) -> bool:
    return any(
        r.prayer_id == prayer_id and r.session_id == session_id
        for r in records.values()
    )


class InMemoryDbClient:
    """Simple in-memory database for development and tests. Lost on restart."""

    storage_name = "Mem"

    def __init__(self):
        self.prayers: Dict[str, PrayerRecord] = {}
        self.questions: Dict[str, QuestionRecord] = {}
        self.comments: Dict[str, CommentRecord] = {}
        self.prayer_comments: Dict[str, PrayerCommentRecord] = {}
        self.bookmarks: Dict[str, BookmarkRecord] = {}
        self.lift_ups: Dict[str, LiftUpRecord] = {}
        self.inspirations: Dict[str, InspirationRecord] = {}
        self._inspiration_ids = itertools.count(1)

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.prayers.clear()
        self.questions.clear()
        self.comments.clear()
        self.prayer_comments.clear()
        self.bookmarks.clear()
        self.lift_ups.clear()
        self.inspirations.clear()
        self._inspiration_ids = itertools.count(1)

    def create_prayer(
        self,
        content: str,
        category: str = DEFAULT_CATEGORY,
        author_name: Optional[str] = None,
    ) -> PrayerRecord:
        record = PrayerRecord(
            id=_new_id(),
            content=content,
            category=category or DEFAULT_CATEGORY,
            author_name=_clean_author(author_name),
            is_anonymous=is_anonymous_author(author_name),
            lift_up_count=0,
            is_moderated=True,
            created_at=_utcnow(),
        )
        self.prayers[record.id] = record
        return record

    def get_prayer(self, prayer_id: str) -> Optional[PrayerRecord]:
        return self.prayers.get(prayer_id)

    def list_prayers(self) -> list[PrayerRecord]:
        return _newest_first(p for p in self.prayers.values() if p.is_moderated)

    def update_prayer_lift_up_count(self, prayer_id: str, count: int) -> None:
        prayer = self.prayers.get(prayer_id)
        if prayer:
            prayer.lift_up_count = count

    def create_question(
        self, title: str, content: str, author_name: Optional[str] = None
    ) -> QuestionRecord:
        record = QuestionRecord(
            id=_new_id(),
            title=title,
            content=content,
            author_name=_clean_author(author_name),
            is_anonymous=is_anonymous_author(author_name),
            is_moderated=True,
            created_at=_utcnow(),
        )
        self.questions[record.id] = record
        return record

    def get_question(self, question_id: str) -> Optional[QuestionRecord]:
        return self.questions.get(question_id)

    def list_questions(self) -> list[QuestionRecord]:
        return _newest_first(q for q in self.questions.values() if q.is_moderated)

    def create_comment(
        self, question_id: str, content: str, author_name: Optional[str] = None
    ) -> CommentRecord:
        if question_id not in self.questions:
            raise MissingParentError(f"Question {question_id} does not exist")
        record = CommentRecord(
            id=_new_id(),
            question_id=question_id,
            content=content,
            author_name=_clean_author(author_name),
            is_anonymous=is_anonymous_author(author_name),
            is_moderated=True,
            created_at=_utcnow(),
        )
        self.comments[record.id] = record
        return record

    def list_comments_by_question(self, question_id: str) -> list[CommentRecord]:
        return _oldest_first(
            c
            for c in self.comments.values()
            if c.question_id == question_id and c.is_moderated
        )

    def create_prayer_comment(
        self, prayer_id: str, content: str, author_name: Optional[str] = None
    ) -> PrayerCommentRecord:
        self._require_prayer(prayer_id)
        record = PrayerCommentRecord(
            id=_new_id(),
            prayer_id=prayer_id,
            content=content,
            author_name=_clean_author(author_name),
            is_anonymous=is_anonymous_author(author_name),
            is_moderated=True,
            created_at=_utcnow(),
        )
        self.prayer_comments[record.id] = record
        return record

    def list_comments_by_prayer(self, prayer_id: str) -> list[PrayerCommentRecord]:
        return _oldest_first(
            c
            for c in self.prayer_comments.values()
            if c.prayer_id == prayer_id and c.is_moderated
        )

    def create_bookmark(self, prayer_id: str, session_id: str) -> BookmarkRecord:
        self._require_prayer(prayer_id)
        if _has_pair(self.bookmarks, prayer_id, session_id):
            raise DuplicateRecordError("Prayer already bookmarked")
        record = BookmarkRecord(
            id=_new_id(),
            prayer_id=prayer_id,
            session_id=session_id,
            created_at=_utcnow(),
        )
        self.bookmarks[record.id] = record
        return record

    def delete_bookmark(self, prayer_id: str, session_id: str) -> None:
        for bookmark_id, bookmark in list(self.bookmarks.items()):
            if bookmark.prayer_id == prayer_id and bookmark.session_id == session_id:
                del self.bookmarks[bookmark_id]

    def has_bookmark(self, prayer_id: str, session_id: str) -> bool:
        return _has_pair(self.bookmarks, prayer_id, session_id)

    def list_bookmarks_by_session(self, session_id: str) -> list[BookmarkRecord]:
        return _newest_first(
            b for b in self.bookmarks.values() if b.session_id == session_id
        )

    def list_bookmarked_prayers(self, session_id: str) -> list[PrayerRecord]:
        prayers: list[PrayerRecord] = []
        for bookmark in self.list_bookmarks_by_session(session_id):
            prayer = self.prayers.get(bookmark.prayer_id)
            if prayer:
                prayers.append(prayer)
        return prayers

    def record_lift_up(self, prayer_id: str, session_id: str) -> LiftUpRecord:
        self._require_prayer(prayer_id)
        if _has_pair(self.lift_ups, prayer_id, session_id):
            raise DuplicateRecordError("Already lifted up this prayer")
        record = LiftUpRecord(
            id=_new_id(),
            prayer_id=prayer_id,
            session_id=session_id,
            created_at=_utcnow(),
        )
        self.lift_ups[record.id] = record
        return record

    def has_lifted_up(self, prayer_id: str, session_id: str) -> bool:
        return _has_pair(self.lift_ups, prayer_id, session_id)

    def count_lift_ups(self, prayer_id: str) -> int:
        return sum(1 for lift in self.lift_ups.values() if lift.prayer_id == prayer_id)

    def create_inspiration(
        self, content: str, attribution: str, type: str
    ) -> InspirationRecord:
        record = InspirationRecord(
            id=str(next(self._inspiration_ids)),
            content=content,
            attribution=attribution,
            type=type,
        )
        self.inspirations[record.id] = record
        return record

    def list_inspirations(self) -> list[InspirationRecord]:
        return sorted(self.inspirations.values(), key=lambda i: int(i.id))

    def get_daily_inspiration(
        self, today: Optional[date] = None
    ) -> Optional[InspirationRecord]:
        return pick_daily_inspiration(self.list_inspirations(), today)

    def count_records(self) -> dict[str, int]:
        return {
            "prayers": sum(1 for p in self.prayers.values() if p.is_moderated),
            "questions": sum(1 for q in self.questions.values() if q.is_moderated),
            "prayerComments": sum(
                1 for c in self.prayer_comments.values() if c.is_moderated
            ),
            "questionComments": sum(
                1 for c in self.comments.values() if c.is_moderated
            ),
            "bookmarks": len(self.bookmarks),
            "liftUps": len(self.lift_ups),
            "inspirations": len(self.inspirations),
        }

    def ping(self) -> bool:
        return True

    def _require_prayer(self, prayer_id: str) -> None:
        if prayer_id not in self.prayers:
            raise MissingParentError(f"Prayer {prayer_id} does not exist")


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).

    Every method runs a single statement in its own session; nothing here spans
    a multi-statement transaction.
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlDbClient")
        url = make_url(database_url)
        engine_kwargs: dict = {"future": True}
        if url.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                # One shared connection, otherwise every thread sees an empty DB.
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs.update(pool_pre_ping=True, pool_recycle=1800)
        self.engine = create_engine(url, **engine_kwargs)
        if url.get_backend_name() == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.storage_name = (
            "Postgres" if url.get_backend_name() == "postgresql" else url.get_backend_name()
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _to_prayer_record(self, row: "PrayerRow") -> PrayerRecord:
        return PrayerRecord(
            id=row.id,
            content=row.content,
            category=row.category or DEFAULT_CATEGORY,
            author_name=row.author_name,
            is_anonymous=bool(row.is_anonymous),
            lift_up_count=int(row.lift_up_count or 0),
            is_moderated=bool(row.is_moderated),
            created_at=_aware(row.created_at),
        )

    def _to_question_record(self, row: "QuestionRow") -> QuestionRecord:
        return QuestionRecord(
            id=row.id,
            title=row.title,
            content=row.content,
            author_name=row.author_name,
            is_anonymous=bool(row.is_anonymous),
            is_moderated=bool(row.is_moderated),
            created_at=_aware(row.created_at),
        )

    def _to_comment_record(self, row: "CommentRow") -> CommentRecord:
        return CommentRecord(
            id=row.id,
            question_id=row.question_id,
            content=row.content,
            author_name=row.author_name,
            is_anonymous=bool(row.is_anonymous),
            is_moderated=bool(row.is_moderated),
            created_at=_aware(row.created_at),
        )

    def _to_prayer_comment_record(self, row: "PrayerCommentRow") -> PrayerCommentRecord:
        return PrayerCommentRecord(
            id=row.id,
            prayer_id=row.prayer_id,
            content=row.content,
            author_name=row.author_name,
            is_anonymous=bool(row.is_anonymous),
            is_moderated=bool(row.is_moderated),
            created_at=_aware(row.created_at),
        )

    def _to_bookmark_record(self, row: "BookmarkRow") -> BookmarkRecord:
        return BookmarkRecord(
            id=row.id,
            prayer_id=row.prayer_id,
            session_id=row.session_id,
            created_at=_aware(row.created_at),
        )

    def _to_lift_up_record(self, row: "LiftUpRow") -> LiftUpRecord:
        return LiftUpRecord(
            id=row.id,
            prayer_id=row.prayer_id,
            session_id=row.session_id,
            created_at=_aware(row.created_at),
        )

    def _to_inspiration_record(self, row: "InspirationRow") -> InspirationRecord:
        return InspirationRecord(
            id=str(row.id),
            content=row.content,
            attribution=row.attribution,
            type=row.type,
        )

    def _insert(self, row):
        with self.Session() as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            return row

    # Prayers

    def create_prayer(
        self,
        content: str,
        category: str = DEFAULT_CATEGORY,
        author_name: Optional[str] = None,
    ) -> PrayerRecord:
        row = self._insert(
            PrayerRow(
                id=_new_id(),
                content=content,
                category=category or DEFAULT_CATEGORY,
                author_name=_clean_author(author_name),
                is_anonymous=is_anonymous_author(author_name),
                lift_up_count=0,
                is_moderated=True,
                created_at=_utcnow(),
            )
        )
        return self._to_prayer_record(row)

    def get_prayer(self, prayer_id: str) -> Optional[PrayerRecord]:
        with self.Session() as session:
            row = session.get(PrayerRow, prayer_id)
            return self._to_prayer_record(row) if row else None

    def list_prayers(self) -> list[PrayerRecord]:
        with self.Session() as session:
            stmt = (
                select(PrayerRow)
                .where(PrayerRow.is_moderated.is_(True))
                .order_by(PrayerRow.created_at.desc(), PrayerRow.id.desc())
            )
            return [self._to_prayer_record(r) for r in session.scalars(stmt)]

    def update_prayer_lift_up_count(self, prayer_id: str, count: int) -> None:
        with self.Session() as session:
            session.execute(
                update(PrayerRow)
                .where(PrayerRow.id == prayer_id)
                .values(lift_up_count=count)
            )
            session.commit()

    # Questions and comments

    def create_question(
        self, title: str, content: str, author_name: Optional[str] = None
    ) -> QuestionRecord:
        row = self._insert(
            QuestionRow(
                id=_new_id(),
                title=title,
                content=content,
                author_name=_clean_author(author_name),
                is_anonymous=is_anonymous_author(author_name),
                is_moderated=True,
                created_at=_utcnow(),
            )
        )
        return self._to_question_record(row)

    def get_question(self, question_id: str) -> Optional[QuestionRecord]:
        with self.Session() as session:
            row = session.get(QuestionRow, question_id)
            return self._to_question_record(row) if row else None

    def list_questions(self) -> list[QuestionRecord]:
        with self.Session() as session:
            stmt = (
                select(QuestionRow)
                .where(QuestionRow.is_moderated.is_(True))
                .order_by(QuestionRow.created_at.desc(), QuestionRow.id.desc())
            )
            return [self._to_question_record(r) for r in session.scalars(stmt)]

    def create_comment(
        self, question_id: str, content: str, author_name: Optional[str] = None
    ) -> CommentRecord:
        try:
            row = self._insert(
                CommentRow(
                    id=_new_id(),
                    question_id=question_id,
                    content=content,
                    author_name=_clean_author(author_name),
                    is_anonymous=is_anonymous_author(author_name),
                    is_moderated=True,
                    created_at=_utcnow(),
                )
            )
        except IntegrityError as exc:
            raise MissingParentError(f"Question {question_id} does not exist") from exc
        return self._to_comment_record(row)

    def list_comments_by_question(self, question_id: str) -> list[CommentRecord]:
        with self.Session() as session:
            stmt = (
                select(CommentRow)
                .where(
                    CommentRow.question_id == question_id,
                    CommentRow.is_moderated.is_(True),
                )
                .order_by(CommentRow.created_at.asc(), CommentRow.id.asc())
            )
            return [self._to_comment_record(r) for r in session.scalars(stmt)]

    def create_prayer_comment(
        self, prayer_id: str, content: str, author_name: Optional[str] = None
    ) -> PrayerCommentRecord:
        try:
            row = self._insert(
                PrayerCommentRow(
                    id=_new_id(),
                    prayer_id=prayer_id,
                    content=content,
                    author_name=_clean_author(author_name),
                    is_anonymous=is_anonymous_author(author_name),
                    is_moderated=True,
                    created_at=_utcnow(),
                )
            )
        except IntegrityError as exc:
            raise MissingParentError(f"Prayer {prayer_id} does not exist") from exc
        return self._to_prayer_comment_record(row)

    def list_comments_by_prayer(self, prayer_id: str) -> list[PrayerCommentRecord]:
        with self.Session() as session:
            stmt = (
                select(PrayerCommentRow)
                .where(
                    PrayerCommentRow.prayer_id == prayer_id,
                    PrayerCommentRow.is_moderated.is_(True),
                )
                .order_by(PrayerCommentRow.created_at.asc(), PrayerCommentRow.id.asc())
            )
            return [self._to_prayer_comment_record(r) for r in session.scalars(stmt)]

    # Bookmarks

    def create_bookmark(self, prayer_id: str, session_id: str) -> BookmarkRecord:
        try:
            row = self._insert(
                BookmarkRow(
                    id=_new_id(),
                    prayer_id=prayer_id,
                    session_id=session_id,
                    created_at=_utcnow(),
                )
            )
        except IntegrityError as exc:
            if self.get_prayer(prayer_id) is None:
                raise MissingParentError(f"Prayer {prayer_id} does not exist") from exc
            raise DuplicateRecordError("Prayer already bookmarked") from exc
        return self._to_bookmark_record(row)

    def delete_bookmark(self, prayer_id: str, session_id: str) -> None:
        with self.Session() as session:
            session.execute(
                delete(BookmarkRow).where(
                    BookmarkRow.prayer_id == prayer_id,
                    BookmarkRow.session_id == session_id,
                )
            )
            session.commit()

    def has_bookmark(self, prayer_id: str, session_id: str) -> bool:
        with self.Session() as session:
            stmt = (
                select(BookmarkRow.id)
                .where(
                    BookmarkRow.prayer_id == prayer_id,
                    BookmarkRow.session_id == session_id,
                )
                .limit(1)
            )
            return session.scalar(stmt) is not None

    def list_bookmarks_by_session(self, session_id: str) -> list[BookmarkRecord]:
        with self.Session() as session:
            stmt = (
                select(BookmarkRow)
                .where(BookmarkRow.session_id == session_id)
                .order_by(BookmarkRow.created_at.desc(), BookmarkRow.id.desc())
            )
            return [self._to_bookmark_record(r) for r in session.scalars(stmt)]

    def list_bookmarked_prayers(self, session_id: str) -> list[PrayerRecord]:
        with self.Session() as session:
            stmt = (
                select(PrayerRow)
                .join(BookmarkRow, BookmarkRow.prayer_id == PrayerRow.id)
                .where(BookmarkRow.session_id == session_id)
                .order_by(BookmarkRow.created_at.desc(), BookmarkRow.id.desc())
            )
            return [self._to_prayer_record(r) for r in session.scalars(stmt)]

    # Lift-ups

    def record_lift_up(self, prayer_id: str, session_id: str) -> LiftUpRecord:
        try:
            row = self._insert(
                LiftUpRow(
                    id=_new_id(),
                    prayer_id=prayer_id,
                    session_id=session_id,
                    created_at=_utcnow(),
                )
            )
        except IntegrityError as exc:
            if self.get_prayer(prayer_id) is None:
                raise MissingParentError(f"Prayer {prayer_id} does not exist") from exc
            raise DuplicateRecordError("Already lifted up this prayer") from exc
        return self._to_lift_up_record(row)

    def has_lifted_up(self, prayer_id: str, session_id: str) -> bool:
        with self.Session() as session:
            stmt = (
                select(LiftUpRow.id)
                .where(
                    LiftUpRow.prayer_id == prayer_id,
                    LiftUpRow.session_id == session_id,
                )
                .limit(1)
            )
            return session.scalar(stmt) is not None

    def count_lift_ups(self, prayer_id: str) -> int:
        with self.Session() as session:
            stmt = (
                select(func.count())
                .select_from(LiftUpRow)
                .where(LiftUpRow.prayer_id == prayer_id)
            )
            return int(session.scalar(stmt) or 0)

    # Daily inspiration

    def create_inspiration(
        self, content: str, attribution: str, type: str
    ) -> InspirationRecord:
        row = self._insert(
            InspirationRow(content=content, attribution=attribution, type=type)
        )
        return self._to_inspiration_record(row)

    def list_inspirations(self) -> list[InspirationRecord]:
        with self.Session() as session:
            stmt = select(InspirationRow).order_by(InspirationRow.id.asc())
            return [self._to_inspiration_record(r) for r in session.scalars(stmt)]

    def get_daily_inspiration(
        self, today: Optional[date] = None
    ) -> Optional[InspirationRecord]:
        return pick_daily_inspiration(self.list_inspirations(), today)

    # Monitoring

    def count_records(self) -> dict[str, int]:
        def _count(session: Session, model, *criteria) -> int:
            stmt = select(func.count()).select_from(model)
            if criteria:
                stmt = stmt.where(*criteria)
            return int(session.scalar(stmt) or 0)

        with self.Session() as session:
            return {
                "prayers": _count(session, PrayerRow, PrayerRow.is_moderated.is_(True)),
                "questions": _count(
                    session, QuestionRow, QuestionRow.is_moderated.is_(True)
                ),
                "prayerComments": _count(
                    session, PrayerCommentRow, PrayerCommentRow.is_moderated.is_(True)
                ),
                "questionComments": _count(
                    session, CommentRow, CommentRow.is_moderated.is_(True)
                ),
                "bookmarks": _count(session, BookmarkRow),
                "liftUps": _count(session, LiftUpRow),
                "inspirations": _count(session, InspirationRow),
            }

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Database connectivity check failed")
            return False
        return True


def _enable_sqlite_foreign_keys(dbapi_conn, connection_record):
    # SQLite ships with foreign key enforcement off.
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


Base = declarative_base()


class PrayerRow(Base):
    __tablename__ = "prayers"

    id = Column(String, primary_key=True)
    content = Column(Text, nullable=False)
    category = Column(String, nullable=False, default=DEFAULT_CATEGORY)
    is_anonymous = Column(Boolean, nullable=False, default=False)
    author_name = Column(String, nullable=True)
    lift_up_count = Column(Integer, nullable=False, default=0)
    is_moderated = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)


class QuestionRow(Base):
    __tablename__ = "questions"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    is_anonymous = Column(Boolean, nullable=False, default=False)
    author_name = Column(String, nullable=True)
    is_moderated = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)


class CommentRow(Base):
    __tablename__ = "comments"

    id = Column(String, primary_key=True)
    question_id = Column(
        String,
        ForeignKey("questions.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    content = Column(Text, nullable=False)
    is_anonymous = Column(Boolean, nullable=False, default=False)
    author_name = Column(String, nullable=True)
    is_moderated = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False)


class PrayerCommentRow(Base):
    __tablename__ = "prayer_comments"

    id = Column(String, primary_key=True)
    prayer_id = Column(
        String,
        ForeignKey("prayers.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    content = Column(Text, nullable=False)
    is_anonymous = Column(Boolean, nullable=False, default=False)
    author_name = Column(String, nullable=True)
    is_moderated = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False)


class BookmarkRow(Base):
    __tablename__ = "bookmarks"
    __table_args__ = (
        UniqueConstraint("prayer_id", "session_id", name="uq_bookmarks_prayer_session"),
    )

    id = Column(String, primary_key=True)
    prayer_id = Column(
        String, ForeignKey("prayers.id", ondelete="RESTRICT"), nullable=False
    )
    session_id = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)


class LiftUpRow(Base):
    __tablename__ = "lift_ups"
    __table_args__ = (
        UniqueConstraint("prayer_id", "session_id", name="uq_lift_ups_prayer_session"),
    )

    id = Column(String, primary_key=True)
    prayer_id = Column(
        String, ForeignKey("prayers.id", ondelete="RESTRICT"), nullable=False
    )
    session_id = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)


class InspirationRow(Base):
    __tablename__ = "daily_inspirations"

    # Integer ids give the rotation a stable insertion order.
    id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(Text, nullable=False)
    attribution = Column(String, nullable=False)
    type = Column(String, nullable=False)
