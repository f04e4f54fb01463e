"""Tag-related Pydantic schemas."""

from .common import ApiModel


class TagResponse(ApiModel):
    """A tag with the number of fanworks carrying it."""

    id: int
    name: str
    fanwork_count: int = 0
