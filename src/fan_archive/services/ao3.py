"""Helpers for bringing Archive of Our Own works into the archive.

AO3 pages are never fetched. A work is either registered by URL (metadata
only, with a link back to the source) or imported from text the user pastes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from fan_archive.core.errors import ValidationFailedError
from fan_archive.models.fanwork import ContentRating

AO3_WORK_URL = re.compile(r"^https?://(www\.)?archiveofourown\.org/works/\d+", re.IGNORECASE)
_WORK_ID = re.compile(r"/works/(\d+)")

# A first line shorter than this, without a period, is taken to be the title.
MAX_TITLE_LINE_LENGTH = 200
DEFAULT_IMPORT_TITLE = "Imported Story"

AO3_RATINGS: dict[str, ContentRating] = {
    "general audiences": ContentRating.ALL_AGES,
    "teen and up audiences": ContentRating.TEEN,
    "mature": ContentRating.MATURE,
    "explicit": ContentRating.EXPLICIT,
    "not rated": ContentRating.ALL_AGES,
}


def is_ao3_work_url(url: str) -> bool:
    """Return True for URLs like https://archiveofourown.org/works/12345."""
    return bool(AO3_WORK_URL.match(url.strip()))


def extract_work_id(url: str) -> str | None:
    """Return the numeric work id from an AO3 URL, or None."""
    match = _WORK_ID.search(url)
    return match.group(1) if match else None


def map_ao3_rating(label: str | None) -> ContentRating:
    """Translate an AO3 rating label into the archive's rating scale."""
    if not label:
        return ContentRating.ALL_AGES
    return AO3_RATINGS.get(label.strip().lower(), ContentRating.ALL_AGES)


@dataclass
class ParsedContent:
    title: str
    content: str
    description: str = ""
    tags: list[str] = field(default_factory=list)


def parse_manual_content(text: str) -> ParsedContent:
    """Split pasted story text into a title and body.

    The first line becomes the title when it is short and contains no period;
    the rest of the text (trimmed) is the body. Otherwise there is no title and
    the whole text is the body.
    """
    lines = text.split("\n")
    first = lines[0] if lines else ""
    if first and len(first) < MAX_TITLE_LINE_LENGTH and "." not in first:
        return ParsedContent(title=first.strip(), content="\n".join(lines[1:]).strip())
    return ParsedContent(title="", content=text)


def build_manual_preview(text: str) -> dict[str, object]:
    """Return upload-form fields for pasted text.

    Raises:
        ValidationFailedError: If nothing was pasted.
    """
    if not text or not text.strip():
        message = "Please paste your story content"
        raise ValidationFailedError([{"field": "content", "message": message}], message=message)

    parsed = parse_manual_content(text)
    return {
        "title": parsed.title or DEFAULT_IMPORT_TITLE,
        "content": parsed.content or text,
        "description": parsed.description or None,
        "tags": parsed.tags,
        "rating": ContentRating.ALL_AGES,
        "word_count": len(text.split()),
        "chapter_count": 1,
    }


def imported_work_fields(ao3_url: str, work_id: str) -> dict[str, str]:
    """Default title, description and placeholder body for a work registered by URL."""
    return {
        "title": f"Imported from AO3 Work {work_id}",
        "description": "Imported from Archive of Our Own",
        "content": (
            f"This work was imported from Archive of Our Own: {ao3_url}\n\n"
            "Please visit the original link for the full content."
        ),
    }
