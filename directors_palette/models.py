"""Shot, export and transfer data models.

Attributes are snake_case in Python; every model serializes with camelCase
aliases so exported JSON and the transfer envelope keep the wire format the
post-production page reads.  extra="ignore" keeps loaders forward-compatible:
unknown fields are dropped rather than rejected.
"""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ProjectType = Literal["story", "music-video"]
ShotStatus = Literal["pending", "processing", "completed", "failed"]
Separator = Literal["\n", "\n\n", ", "]


def utc_now_iso() -> str:
    """Current UTC time as ISO 8601 with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> dict:
        """Dump with camelCase keys, dropping unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ── Export models ─────────────────────────────────────────────────────────────


class ShotMetadata(_WireModel):
    director_style: Optional[str] = None
    timestamp: Optional[str] = None  # ISO 8601
    source_type: Optional[ProjectType] = None


class ShotData(_WireModel):
    """A single shot description as produced by a chapter or section breakdown.

    description may carry @tokens that are substituted at export time.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    description: str
    chapter: Optional[str] = None
    section: Optional[str] = None
    shot_number: Optional[int] = None
    metadata: Optional[ShotMetadata] = None


class ExportFormat(str, Enum):
    TEXT = "text"
    NUMBERED = "numbered"
    JSON = "json"
    CSV = "csv"


class ExportConfig(_WireModel):
    """Bulk export settings; a plain value object."""

    prefix: str = ""
    suffix: str = ""
    use_artist_descriptions: bool = False
    format: ExportFormat = ExportFormat.TEXT
    separator: Separator = "\n"
    include_metadata: bool = False


class ExportVariables(_WireModel):
    """Values for @token substitution.  Missing or empty values leave tokens as-is."""

    artist_name: Optional[str] = None
    artist_description: Optional[str] = None
    artist_tag: Optional[str] = None
    director: Optional[str] = None
    chapter: Optional[str] = None
    section: Optional[str] = None
    location: Optional[str] = None


class ExportResult(_WireModel):
    formatted_text: str
    total_shots: int
    processing_time: float  # milliseconds
    config: ExportConfig


# ── Breakdown models ──────────────────────────────────────────────────────────


class ChapterBreakdown(_WireModel):
    """One chapter of a story breakdown."""

    chapter_id: str
    title: Optional[str] = None
    shots: List[str] = []
    character_references: List[str] = []
    location_references: List[str] = []
    prop_references: List[str] = []
    coverage_analysis: Optional[str] = None
    additional_opportunities: List[str] = []


class SectionBreakdown(_WireModel):
    """One section (verse, chorus, bridge...) of a music video breakdown.

    shots is optional: sections without a shot list are skipped on conversion.
    """

    section_id: str
    title: Optional[str] = None
    shots: Optional[List[str]] = None


# ── Transfer models ───────────────────────────────────────────────────────────


class PostProductionShot(_WireModel):
    """A shot queued for image/video generation in post-production."""

    id: str
    project_id: str
    project_type: ProjectType
    shot_number: int
    description: str
    status: ShotStatus = "pending"
    source_chapter: Optional[str] = None
    source_section: Optional[str] = None
    metadata: Optional[ShotMetadata] = None


class TransferEnvelope(_WireModel):
    shots: List[PostProductionShot]
    source: str
    transferred_at: str  # ISO 8601


# ── Reference models ──────────────────────────────────────────────────────────


class Reference(_WireModel):
    """A character, location or prop named in the narrative, with its @handle."""

    id: str
    reference: str
    name: str
    description: str
    appearances: List[str] = []


class Treatment(_WireModel):
    id: str
    name: str
    description: str


class StoryReferences(_WireModel):
    characters: List[Reference] = []
    locations: List[Reference] = []
    props: List[Reference] = []
    themes: List[str] = []
    suggested_treatments: List[Treatment] = Field(default_factory=list)
