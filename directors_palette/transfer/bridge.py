"""Shot transfer from the breakdown stage to post-production.

Conversion is deterministic: shot IDs derive from (chapter/section id, index),
so converting the same breakdown twice yields the same IDs.

Transfer is a single slot: storing overwrites whatever was there, retrieving
consumes it.  No merging, no cross-process coordination, no retries.
"""
from __future__ import annotations

import json
from typing import Iterable, List, Optional

import jsonschema
from pydantic import ValidationError

from directors_palette.config import get_settings
from directors_palette.contract_validate import validate_transfer_envelope
from directors_palette.logging_config import get_logger
from directors_palette.models import (
    ChapterBreakdown,
    PostProductionShot,
    SectionBreakdown,
    ShotMetadata,
    TransferEnvelope,
    utc_now_iso,
)
from directors_palette.transfer.store import SessionStore, get_default_store

logger = get_logger(__name__)

TRANSFER_KEY = "postProductionShots"


def _make_shot_id(source_id: str, index: int) -> str:
    """Deterministic shot ID: "{source_id}_shot_{index + 1}"."""
    return f"{source_id}_shot_{index + 1}"


# ── Conversion ────────────────────────────────────────────────────────────────


def convert_story_shots(
    chapter_breakdowns: Iterable[ChapterBreakdown],
    project_id: str,
    *,
    timestamp: Optional[str] = None,
) -> List[PostProductionShot]:
    """Flatten story chapters into pending post-production shots.

    Shot numbers restart at 1 in every chapter.
    """
    timestamp = timestamp or utc_now_iso()
    shots: List[PostProductionShot] = []
    for chapter in chapter_breakdowns:
        for index, description in enumerate(chapter.shots):
            shots.append(
                PostProductionShot(
                    id=_make_shot_id(chapter.chapter_id, index),
                    project_id=project_id,
                    project_type="story",
                    shot_number=index + 1,
                    description=description,
                    source_chapter=chapter.chapter_id,
                    status="pending",
                    metadata=ShotMetadata(timestamp=timestamp, source_type="story"),
                )
            )
    return shots


def convert_music_video_shots(
    section_breakdowns: Iterable[SectionBreakdown],
    project_id: str,
    *,
    timestamp: Optional[str] = None,
) -> List[PostProductionShot]:
    """Flatten music video sections into pending post-production shots.

    Sections without a shot list contribute nothing.
    """
    timestamp = timestamp or utc_now_iso()
    shots: List[PostProductionShot] = []
    for section in section_breakdowns:
        if not section.shots:
            continue
        for index, description in enumerate(section.shots):
            shots.append(
                PostProductionShot(
                    id=_make_shot_id(section.section_id, index),
                    project_id=project_id,
                    project_type="music-video",
                    shot_number=index + 1,
                    description=description,
                    source_section=section.section_id,
                    status="pending",
                    metadata=ShotMetadata(timestamp=timestamp, source_type="music-video"),
                )
            )
    return shots


# ── Transfer ──────────────────────────────────────────────────────────────────


def store_shots_for_transfer(
    shots: List[PostProductionShot],
    store: Optional[SessionStore] = None,
    *,
    source: Optional[str] = None,
    transferred_at: Optional[str] = None,
) -> TransferEnvelope:
    """Write *shots* into the transfer slot, replacing any previous content.

    The envelope is validated against TransferEnvelope.v1.json BEFORE it is
    written; a non-conformant envelope never reaches the store.

    Returns the envelope that was written.

    Raises:
        jsonschema.ValidationError: the envelope violates the contract.
        OSError: a file-backed store cannot be written.
    """
    store = store if store is not None else get_default_store()
    envelope = TransferEnvelope(
        shots=list(shots),
        source=source or get_settings().transfer_source,
        transferred_at=transferred_at or utc_now_iso(),
    )
    payload = envelope.to_wire()
    validate_transfer_envelope(payload)

    store.set_item(TRANSFER_KEY, json.dumps(payload, ensure_ascii=False))
    logger.info("Stored %d shots for transfer under %r", len(envelope.shots), TRANSFER_KEY)
    return envelope


def retrieve_transferred_shots(
    store: Optional[SessionStore] = None,
) -> Optional[List[PostProductionShot]]:
    """Consume the transfer slot.

    Returns:
        The stored shots, after deleting the slot; or None when the slot is
        empty or its content cannot be parsed.  An unparseable slot is logged
        and left in place.
    """
    store = store if store is not None else get_default_store()
    stored = store.get_item(TRANSFER_KEY)
    if stored is None:
        logger.debug("No transferred shots under %r", TRANSFER_KEY)
        return None

    try:
        payload = json.loads(stored)
        validate_transfer_envelope(payload)
        envelope = TransferEnvelope.model_validate(payload)
    except (json.JSONDecodeError, jsonschema.ValidationError, ValidationError) as exc:
        logger.error("Error parsing transferred shots: %s", exc)
        return None

    store.remove_item(TRANSFER_KEY)
    logger.info(
        "Retrieved %d shots transferred from %s at %s",
        len(envelope.shots), envelope.source, envelope.transferred_at,
    )
    return envelope.shots


def has_transferred_shots(store: Optional[SessionStore] = None) -> bool:
    """True if the transfer slot holds data.  Does not consume it."""
    store = store if store is not None else get_default_store()
    return store.get_item(TRANSFER_KEY) is not None
