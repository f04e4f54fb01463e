"""Supporting services for the Fan Archive application."""

from .keepalive import KeepAliveWorker
from .media import LocalMediaStore, StoredMedia, get_media_store

__all__ = [
    "KeepAliveWorker",
    "LocalMediaStore",
    "StoredMedia",
    "get_media_store",
]
