"""Shot list files v1: load, dump, validate.

A shot list file is either a bare JSON array of shots or an object with a
``shots`` array (the shape of a JSON export or a transfer envelope).
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Union

from pydantic import TypeAdapter, ValidationError

from directors_palette.models import ShotData

_SHOTS_ADAPTER = TypeAdapter(List[ShotData])


def _unwrap(data: Any) -> Any:
    if isinstance(data, dict) and "shots" in data:
        return data["shots"]
    return data


def load_shots(source: Union[str, bytes, dict, list, Path]) -> List[ShotData]:
    """Parse shots from a JSON string, bytes, dict, list, or file Path.

    Raises:
        ValidationError: data does not conform to the ShotData model.
        FileNotFoundError: Path does not exist.
    """
    if isinstance(source, Path):
        data = json.loads(source.read_text(encoding="utf-8"))
    elif isinstance(source, (str, bytes)):
        data = json.loads(source)
    else:
        data = source
    return _SHOTS_ADAPTER.validate_python(_unwrap(data))


def dump_shots(shots: List[ShotData], *, indent: int = 2) -> str:
    """Serialize shots to a camelCase JSON array (unset optionals omitted)."""
    raw = [shot.to_wire() for shot in shots]
    return json.dumps(raw, indent=indent, ensure_ascii=False)


def validate_shots(data: Any) -> List[str]:
    """Validate raw shot data.

    Returns a list of human-readable error strings (empty list = valid).
    Does not raise.
    """
    try:
        _SHOTS_ADAPTER.validate_python(_unwrap(data))
        return []
    except ValidationError as exc:
        return [f"{e['loc']}: {e['msg']}" for e in exc.errors()]
