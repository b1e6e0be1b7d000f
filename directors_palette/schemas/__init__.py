"""Versioned schema loaders and validators."""

from directors_palette.schemas.shots_v1 import dump_shots, load_shots, validate_shots

__all__ = [
    "load_shots",
    "dump_shots",
    "validate_shots",
]
