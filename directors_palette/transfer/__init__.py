"""Breakdown → post-production shot transfer."""

from directors_palette.transfer.bridge import (
    TRANSFER_KEY,
    convert_music_video_shots,
    convert_story_shots,
    has_transferred_shots,
    retrieve_transferred_shots,
    store_shots_for_transfer,
)
from directors_palette.transfer.store import (
    FileSessionStore,
    MemorySessionStore,
    SessionStore,
    get_default_store,
)

__all__ = [
    "TRANSFER_KEY",
    "convert_music_video_shots",
    "convert_story_shots",
    "FileSessionStore",
    "get_default_store",
    "has_transferred_shots",
    "MemorySessionStore",
    "retrieve_transferred_shots",
    "SessionStore",
    "store_shots_for_transfer",
]
