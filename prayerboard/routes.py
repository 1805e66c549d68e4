"""
HTTP routes for the prayer board API.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from prayerboard.db import DbClient
from prayerboard.dependencies import get_db_client
from prayerboard.moderation import NAME_MODERATION_MESSAGE, is_profane, moderate_content
from prayerboard.schemas import (
    Bookmark,
    BookmarkCreate,
    Comment,
    CommentCreate,
    DailyInspiration,
    HealthResponse,
    LiftUpCreate,
    LiftUpResult,
    Prayer,
    PrayerComment,
    PrayerCreate,
    PrayerStatus,
    Question,
    QuestionCreate,
    SuccessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

SESSION_REQUIRED = "Session ID required"


def _moderate(*texts: Optional[str]) -> None:
    for value in texts:
        result = moderate_content(value)
        if result.is_profane:
            raise HTTPException(status_code=400, detail=result.message)


def _moderate_author(author_name: Optional[str]) -> None:
    if is_profane(author_name):
        raise HTTPException(status_code=400, detail=NAME_MODERATION_MESSAGE)


def _require_session(session_id: Optional[str]) -> str:
    if not session_id:
        raise HTTPException(status_code=400, detail=SESSION_REQUIRED)
    return session_id


def _require_prayer(db: DbClient, prayer_id: str) -> None:
    if db.get_prayer(prayer_id) is None:
        raise HTTPException(status_code=404, detail="Prayer not found")


# Prayers


@router.get("/prayers", response_model=list[Prayer])
def list_prayers(db: DbClient = Depends(get_db_client)):
    return [Prayer.model_validate(p) for p in db.list_prayers()]


@router.post("/prayers", response_model=Prayer, status_code=201)
def create_prayer(payload: PrayerCreate, db: DbClient = Depends(get_db_client)):
    _moderate(payload.content)
    _moderate_author(payload.author_name)

    prayer = db.create_prayer(
        payload.content,
        category=payload.category,
        author_name=payload.author_name,
    )
    logger.info("Created prayer %s: %s", prayer.id, prayer.content[:80])
    return Prayer.model_validate(prayer)


@router.post("/prayers/lift-up", response_model=LiftUpResult, status_code=201)
def lift_up_prayer(payload: LiftUpCreate, db: DbClient = Depends(get_db_client)):
    """
    Record a one-time lift-up for this session and refresh the prayer's count
    from a full recount.
    """
    _require_prayer(db, payload.prayer_id)
    if db.has_lifted_up(payload.prayer_id, payload.session_id):
        raise HTTPException(status_code=400, detail="Already lifted up this prayer")

    db.record_lift_up(payload.prayer_id, payload.session_id)
    count = db.count_lift_ups(payload.prayer_id)
    db.update_prayer_lift_up_count(payload.prayer_id, count)
    return LiftUpResult(success=True, count=count)


@router.get("/prayers/{prayer_id}/status", response_model=PrayerStatus)
def prayer_status(
    prayer_id: str,
    session_id: Optional[str] = Query(None, alias="sessionId"),
    db: DbClient = Depends(get_db_client),
):
    session_id = _require_session(session_id)
    return PrayerStatus(
        has_lifted=db.has_lifted_up(prayer_id, session_id),
        has_bookmark=db.has_bookmark(prayer_id, session_id),
    )


@router.get("/prayers/{prayer_id}/comments", response_model=list[PrayerComment])
def list_prayer_comments(prayer_id: str, db: DbClient = Depends(get_db_client)):
    return [PrayerComment.model_validate(c) for c in db.list_comments_by_prayer(prayer_id)]


@router.post(
    "/prayers/{prayer_id}/comments", response_model=PrayerComment, status_code=201
)
def create_prayer_comment(
    prayer_id: str,
    payload: CommentCreate,
    db: DbClient = Depends(get_db_client),
):
    _moderate(payload.content)
    _moderate_author(payload.author_name)
    _require_prayer(db, prayer_id)

    comment = db.create_prayer_comment(
        prayer_id, payload.content, author_name=payload.author_name
    )
    return PrayerComment.model_validate(comment)


# Bookmarks


@router.get("/bookmarks/prayers", response_model=list[Prayer])
def list_bookmarked_prayers(
    session_id: Optional[str] = Query(None, alias="sessionId"),
    db: DbClient = Depends(get_db_client),
):
    session_id = _require_session(session_id)
    return [Prayer.model_validate(p) for p in db.list_bookmarked_prayers(session_id)]


@router.post("/bookmarks", response_model=Bookmark, status_code=201)
def create_bookmark(payload: BookmarkCreate, db: DbClient = Depends(get_db_client)):
    _require_prayer(db, payload.prayer_id)
    if db.has_bookmark(payload.prayer_id, payload.session_id):
        raise HTTPException(status_code=400, detail="Prayer already bookmarked")

    bookmark = db.create_bookmark(payload.prayer_id, payload.session_id)
    return Bookmark.model_validate(bookmark)


@router.delete("/bookmarks/{prayer_id}", response_model=SuccessResponse)
def delete_bookmark(
    prayer_id: str,
    session_id: Optional[str] = Query(None, alias="sessionId"),
    db: DbClient = Depends(get_db_client),
):
    session_id = _require_session(session_id)
    db.delete_bookmark(prayer_id, session_id)
    return SuccessResponse(success=True)


# Daily inspiration


@router.get("/daily-inspiration", response_model=DailyInspiration)
def daily_inspiration(db: DbClient = Depends(get_db_client)):
    inspiration = db.get_daily_inspiration()
    if inspiration is None:
        raise HTTPException(status_code=404, detail="No inspiration found")
    return DailyInspiration.model_validate(inspiration)


# Q&A


@router.get("/questions", response_model=list[Question])
def list_questions(db: DbClient = Depends(get_db_client)):
    return [Question.model_validate(q) for q in db.list_questions()]


@router.post("/questions", response_model=Question, status_code=201)
def create_question(payload: QuestionCreate, db: DbClient = Depends(get_db_client)):
    _moderate(payload.title, payload.content)
    _moderate_author(payload.author_name)

    question = db.create_question(
        payload.title, payload.content, author_name=payload.author_name
    )
    return Question.model_validate(question)


@router.get("/questions/{question_id}/comments", response_model=list[Comment])
def list_question_comments(question_id: str, db: DbClient = Depends(get_db_client)):
    return [Comment.model_validate(c) for c in db.list_comments_by_question(question_id)]


@router.post(
    "/questions/{question_id}/comments", response_model=Comment, status_code=201
)
def create_question_comment(
    question_id: str,
    payload: CommentCreate,
    db: DbClient = Depends(get_db_client),
):
    _moderate(payload.content)
    _moderate_author(payload.author_name)
    if db.get_question(question_id) is None:
        raise HTTPException(status_code=404, detail="Question not found")

    comment = db.create_comment(
        question_id, payload.content, author_name=payload.author_name
    )
    return Comment.model_validate(comment)


# Monitoring


@router.get("/health", response_model=HealthResponse)
def health(db: DbClient = Depends(get_db_client)):
    """Storage backend and record counts. Diagnostic only."""
    return HealthResponse(
        storage=db.storage_name,
        database=db.ping(),
        counts=db.count_records(),
    )
