"""Tag listing endpoint."""

from fastapi import APIRouter

from fan_archive.api.v1.dependencies import SessionDep
from fan_archive.repositories import TagRepository
from fan_archive.schemas.tag import TagResponse

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=list[TagResponse])
def list_tags(db: SessionDep) -> list[TagResponse]:
    """Return every tag by name with the number of fanworks using it."""
    return [
        TagResponse(id=tag.id, name=tag.name, fanwork_count=count)
        for tag, count in TagRepository(db).list_with_counts()
    ]
