"""Tests for shot list file load/dump/validate."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from directors_palette.schemas.shots_v1 import dump_shots, load_shots, validate_shots

_RAW = [
    {"id": "s1", "description": "Wide shot of @artist", "chapter": "Chapter 1", "shotNumber": 1},
    {"id": "s2", "description": "Close-up", "section": "Verse 1"},
]


class TestLoadShots:

    def test_from_list(self):
        shots = load_shots(_RAW)
        assert [s.id for s in shots] == ["s1", "s2"]
        assert shots[0].shot_number == 1

    def test_from_wrapped_object(self):
        assert len(load_shots({"shots": _RAW, "totalShots": 2})) == 2

    def test_from_json_text(self):
        assert load_shots(json.dumps(_RAW))[1].section == "Verse 1"

    def test_from_path(self, tmp_path: Path):
        path = tmp_path / "shots.json"
        path.write_text(json.dumps(_RAW), encoding="utf-8")
        assert len(load_shots(path)) == 2

    def test_missing_path_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_shots(tmp_path / "absent.json")

    def test_invalid_raises(self):
        with pytest.raises(ValidationError):
            load_shots([{"id": "s1"}])


class TestDumpShots:

    def test_dump_reloads_equal(self):
        shots = load_shots(_RAW)
        assert load_shots(dump_shots(shots)) == shots

    def test_dump_uses_camel_case(self):
        data = json.loads(dump_shots(load_shots(_RAW)))
        assert data[0]["shotNumber"] == 1
        assert "section" not in data[0]


class TestValidateShots:

    def test_valid(self):
        assert validate_shots(_RAW) == []

    def test_errors_are_strings(self):
        errors = validate_shots([{"description": "no id"}])
        assert errors and all(isinstance(e, str) for e in errors)
