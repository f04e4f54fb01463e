"""Fanwork catalog, upload and AO3 import endpoints for the Fan Archive API."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, Query, UploadFile, status
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fan_archive.api.v1.dependencies import (
    CurrentUserDep,
    MediaStoreDep,
    OptionalUserDep,
    SessionDep,
)
from fan_archive.core.errors import NotFoundError, ValidationFailedError
from fan_archive.core.settings import settings
from fan_archive.db.time import utcnow
from fan_archive.models import ContentRating, Fanwork, FanworkType, User
from fan_archive.repositories import FanworkFilters, FanworkRepository
from fan_archive.schemas.fanwork import (
    AO3ImportRequest,
    AO3Preview,
    AO3PreviewRequest,
    FanworkCreate,
    FanworkResponse,
    split_tags,
)
from fan_archive.services import ao3

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/fanworks", tags=["fanworks"])

FANWORK_NOT_FOUND = "Fanwork not found"


def can_view(fanwork: Fanwork, viewer: User | None) -> bool:
    """Hidden works are visible only to their author and to moderators."""
    if not fanwork.is_hidden:
        return True
    if viewer is None:
        return False
    return viewer.id == fanwork.author_id or viewer.is_moderator


def get_fanwork_or_404(db: Session, fanwork_id: int) -> Fanwork:
    fanwork = FanworkRepository(db).get(fanwork_id)
    if fanwork is None:
        raise NotFoundError(FANWORK_NOT_FOUND)
    return fanwork


def get_visible_fanwork_or_404(db: Session, fanwork_id: int, viewer: User | None) -> Fanwork:
    """Load a fanwork, treating one the viewer may not see as missing."""
    fanwork = get_fanwork_or_404(db, fanwork_id)
    if not can_view(fanwork, viewer):
        raise NotFoundError(FANWORK_NOT_FOUND)
    return fanwork


def _attach_tags(repo: FanworkRepository, fanwork: Fanwork, tags: list[str]) -> None:
    # The fanwork is already committed; a tag failure must not undo it.
    if not tags:
        return
    try:
        repo.attach_tags(fanwork, tags)
    except SQLAlchemyError:
        repo.session.rollback()
        logger.exception("Failed to attach tags to fanwork %s", fanwork.id)


@router.get("", response_model=list[FanworkResponse])
def list_fanworks(
    db: SessionDep,
    viewer: OptionalUserDep,
    types: Annotated[list[FanworkType] | None, Query(alias="type")] = None,
    ratings: Annotated[list[ContentRating] | None, Query(alias="rating")] = None,
    tags: Annotated[list[str] | None, Query()] = None,
    search: Annotated[str | None, Query(max_length=200)] = None,
    author_id: Annotated[str | None, Query(alias="authorId")] = None,
    include_hidden: Annotated[bool, Query(alias="includeHidden")] = False,
    limit: Annotated[
        int, Query(ge=1, le=settings.fanworks_max_limit)
    ] = settings.fanworks_default_limit,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[Fanwork]:
    """List fanworks, newest first.

    Hidden works are only included for moderators who ask for them.
    """
    filters = FanworkFilters(
        types=[value.value for value in types or ()],
        ratings=[value.value for value in ratings or ()],
        tags=split_tags(tags),
        search=search,
        author_id=author_id,
        include_hidden=include_hidden and viewer is not None and viewer.is_moderator,
        limit=limit,
        offset=offset,
    )
    return FanworkRepository(db).find(filters)


@router.get("/{fanwork_id}", response_model=FanworkResponse)
def get_fanwork(fanwork_id: int, db: SessionDep, viewer: OptionalUserDep) -> Fanwork:
    """Return a single fanwork with its author and tags."""
    return get_visible_fanwork_or_404(db, fanwork_id, viewer)


@router.post("", response_model=FanworkResponse, status_code=status.HTTP_201_CREATED)
def create_fanwork(
    current_user: CurrentUserDep,
    db: SessionDep,
    media: MediaStoreDep,
    title: Annotated[str, Form()],
    type: Annotated[str, Form()],
    rating: Annotated[str, Form()],
    description: Annotated[str | None, Form()] = None,
    content: Annotated[str | None, Form()] = None,
    word_count: Annotated[str | None, Form(alias="wordCount")] = None,
    chapter_count: Annotated[str | None, Form(alias="chapterCount")] = None,
    is_complete: Annotated[str | None, Form(alias="isComplete")] = None,
    tags: Annotated[list[str] | None, Form()] = None,
    file: Annotated[UploadFile | None, File()] = None,
) -> Fanwork:
    """Create a fanwork from the multipart upload form.

    An attached file is stored before the database insert and removed again
    if the insert fails.
    """
    try:
        data = FanworkCreate.model_validate(
            {
                "title": title,
                "type": type,
                "rating": rating,
                "description": description,
                "content": content,
                "word_count": word_count,
                "chapter_count": chapter_count,
                "is_complete": is_complete,
                "tags": tags,
            }
        )
    except ValidationError as exc:
        raise ValidationFailedError.from_pydantic(exc) from exc

    content_url = None
    if file is not None and file.filename:
        content_url = media.save(file).url

    repo = FanworkRepository(db)
    try:
        fanwork = repo.create(
            author_id=current_user.id,
            title=data.title,
            description=data.description,
            type=data.type.value,
            rating=data.rating.value,
            content=data.content,
            content_url=content_url,
            word_count=data.word_count,
            chapter_count=data.chapter_count,
            is_complete=data.is_complete,
        )
    except Exception:
        media.delete(content_url)
        raise

    _attach_tags(repo, fanwork, data.tags)
    logger.info("User %s created fanwork %s", current_user.id, fanwork.id)
    return fanwork


@router.post("/import/ao3", response_model=FanworkResponse, status_code=status.HTTP_201_CREATED)
def import_from_ao3(
    payload: AO3ImportRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Fanwork:
    """Register an AO3 work by URL.

    Only metadata is stored; the content points readers back to AO3.
    """
    ao3_url = str(payload.ao3_url)
    work_id = ao3.extract_work_id(ao3_url)
    if not ao3.is_ao3_work_url(ao3_url) or work_id is None:
        raise ValidationFailedError(message="Invalid AO3 URL format")

    defaults = ao3.imported_work_fields(ao3_url, work_id)
    fanwork = FanworkRepository(db).create(
        author_id=current_user.id,
        title=(payload.title or "").strip() or defaults["title"],
        description=payload.description or defaults["description"],
        type=FanworkType.FANFICTION.value,
        rating=ContentRating.TEEN.value,
        content=defaults["content"],
        ao3_work_id=work_id,
        ao3_url=ao3_url,
        imported_at=utcnow(),
    )
    logger.info("User %s imported AO3 work %s as fanwork %s", current_user.id, work_id, fanwork.id)
    return fanwork


@router.post("/import/ao3/preview", response_model=AO3Preview)
def preview_ao3_import(payload: AO3PreviewRequest, current_user: CurrentUserDep) -> AO3Preview:
    """Turn pasted story text into upload-form fields without saving anything."""
    return AO3Preview.model_validate(ao3.build_manual_preview(payload.content))
