"""CLI tests for the directors-palette subcommands."""
from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from directors_palette import config as config_module
from directors_palette.cli import main
from directors_palette.config import Settings
from directors_palette.logging_config import ROOT_LOGGER
from directors_palette.transfer import FileSessionStore, has_transferred_shots

_SHOTS = [
    {"id": "s1", "description": "Wide shot of @artist in the studio", "chapter": "Chapter 1"},
    {"id": "s2", "description": "Close-up of @artist recording vocals", "chapter": "Chapter 1"},
]

_CHAPTERS = {
    "chapters": [
        {"chapterId": "chapter_1", "shots": ["Wide shot of the city", "Close-up of protagonist"]},
        {"chapterId": "chapter_2", "shots": ["Chase scene"]},
    ]
}


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path: Path):
    settings = Settings(openai_api_key=None, transfer_dir=tmp_path / "session", log_level="WARNING")
    monkeypatch.setattr(config_module, "get_settings", lambda: settings)
    yield
    logging.getLogger(ROOT_LOGGER).handlers.clear()


def _write(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _run(*args: str) -> int:
    with pytest.raises(SystemExit) as excinfo:
        main(list(args))
    return excinfo.value.code


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------

class TestExport:

    def test_text_to_stdout(self, tmp_path: Path, capsys):
        shots = _write(tmp_path / "shots.json", _SHOTS)
        code = _run("export", "--shots", str(shots), "--artist", "Drake",
                    "--prefix", "Camera:", "--suffix", ", 4K quality")
        assert code == 0
        assert capsys.readouterr().out.splitlines() == [
            "Camera: Wide shot of Drake in the studio, 4K quality",
            "Camera: Close-up of Drake recording vocals, 4K quality",
        ]

    def test_json_to_file(self, tmp_path: Path):
        shots = _write(tmp_path / "shots.json", {"shots": _SHOTS})
        out = tmp_path / "out" / "export.json"
        code = _run("export", "--shots", str(shots), "--format", "json", "--output", str(out))
        assert code == 0
        doc = json.loads(out.read_text(encoding="utf-8"))
        assert doc["totalShots"] == 2

    def test_output_dir_uses_suggested_name(self, tmp_path: Path):
        shots = _write(tmp_path / "shots.json", _SHOTS)
        out_dir = tmp_path / "exports"
        code = _run("export", "--shots", str(shots), "--format", "csv",
                    "--project-type", "music-video", "--artist", "Lil Wayne",
                    "--output-dir", str(out_dir))
        assert code == 0
        (written,) = list(out_dir.iterdir())
        assert written.name.startswith("music-video-lil_wayne-shots-")
        assert written.suffix == ".csv"

    def test_invalid_shots_exit_1(self, tmp_path: Path, capsys):
        shots = _write(tmp_path / "shots.json", [{"id": "no-description"}])
        assert _run("export", "--shots", str(shots)) == 1
        assert capsys.readouterr().out.startswith("ERROR: invalid shots")

    def test_missing_file_exit_1(self, tmp_path: Path):
        assert _run("export", "--shots", str(tmp_path / "absent.json")) == 1

    def test_unwritable_output_exit_1(self, tmp_path: Path, capsys):
        shots = _write(tmp_path / "shots.json", _SHOTS)
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory", encoding="utf-8")
        code = _run("export", "--shots", str(shots), "--output", str(blocker / "out.txt"))
        assert code == 1
        assert capsys.readouterr().out.startswith("ERROR: export failed")


# ---------------------------------------------------------------------------
# transfer-*
# ---------------------------------------------------------------------------

class TestTransfer:

    def test_store_status_retrieve(self, tmp_path: Path, capsys):
        breakdown = _write(tmp_path / "breakdown.json", _CHAPTERS)
        store_dir = tmp_path / "store"

        assert _run("transfer-store", "--breakdown", str(breakdown),
                    "--project-id", "story_123", "--store-dir", str(store_dir)) == 0
        assert _run("transfer-status", "--store-dir", str(store_dir)) == 0

        out = tmp_path / "shots.json"
        assert _run("transfer-retrieve", "--store-dir", str(store_dir), "--output", str(out)) == 0
        shots = json.loads(out.read_text(encoding="utf-8"))
        assert [s["id"] for s in shots] == ["chapter_1_shot_1", "chapter_1_shot_2", "chapter_2_shot_1"]

        assert _run("transfer-status", "--store-dir", str(store_dir)) == 1
        assert _run("transfer-retrieve", "--store-dir", str(store_dir)) == 1

    def test_music_video_sections(self, tmp_path: Path, capsys):
        breakdown = _write(tmp_path / "breakdown.json", [
            {"sectionId": "verse_1", "shots": ["Singer in spotlight"]},
            {"sectionId": "intro"},
        ])
        assert _run("transfer-store", "--breakdown", str(breakdown), "--project-id", "mv",
                    "--project-type", "music-video") == 0
        capsys.readouterr()
        assert _run("transfer-retrieve") == 0
        shots = json.loads(capsys.readouterr().out)
        assert shots[0]["sourceSection"] == "verse_1"

    def test_invalid_breakdown_exit_1(self, tmp_path: Path):
        breakdown = _write(tmp_path / "breakdown.json", [{"title": "no id"}])
        assert _run("transfer-store", "--breakdown", str(breakdown), "--project-id", "p") == 1

    def test_retrieve_creates_missing_output_dir(self, tmp_path: Path):
        breakdown = _write(tmp_path / "breakdown.json", _CHAPTERS)
        store_dir = tmp_path / "store"
        _run("transfer-store", "--breakdown", str(breakdown), "--project-id", "p", "--store-dir", str(store_dir))
        out = tmp_path / "missing_dir" / "out.json"
        assert _run("transfer-retrieve", "--store-dir", str(store_dir), "--output", str(out)) == 0
        assert len(json.loads(out.read_text(encoding="utf-8"))) == 3

    def test_failed_retrieve_write_keeps_shots_queued(self, tmp_path: Path, capsys):
        breakdown = _write(tmp_path / "breakdown.json", _CHAPTERS)
        store_dir = tmp_path / "store"
        _run("transfer-store", "--breakdown", str(breakdown), "--project-id", "p", "--store-dir", str(store_dir))
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory", encoding="utf-8")
        capsys.readouterr()

        code = _run("transfer-retrieve", "--store-dir", str(store_dir), "--output", str(blocker / "out.json"))
        assert code == 1
        assert "shots left queued" in capsys.readouterr().out
        assert has_transferred_shots(FileSessionStore(store_dir))

        out = tmp_path / "shots.json"
        assert _run("transfer-retrieve", "--store-dir", str(store_dir), "--output", str(out)) == 0
        shots = json.loads(out.read_text(encoding="utf-8"))
        assert [s["id"] for s in shots] == ["chapter_1_shot_1", "chapter_1_shot_2", "chapter_2_shot_1"]


# ---------------------------------------------------------------------------
# expand-prompt
# ---------------------------------------------------------------------------

class TestExpandPrompt:

    def test_brackets(self, capsys):
        assert _run("expand-prompt", "--prompt", "apple [in a car, in space]") == 0
        assert capsys.readouterr().out.splitlines() == ["apple in a car", "apple in space"]

    def test_wildcards_file(self, tmp_path: Path, capsys):
        wildcards = _write(tmp_path / "wc.json", {"hero": "knight\nwitch"})
        assert _run("expand-prompt", "--prompt", "a _hero_", "--wildcards", str(wildcards),
                    "--credits-per-image", "5") == 0
        captured = capsys.readouterr()
        assert captured.out.splitlines() == ["a knight", "a witch"]
        assert "2 images, 10 credits" in captured.err

    def test_bad_syntax_exit_1(self, capsys):
        assert _run("expand-prompt", "--prompt", "apple [a, b") == 1
        assert "Missing closing bracket" in capsys.readouterr().out

    def test_wildcards_must_be_object(self, tmp_path: Path, capsys):
        wildcards = _write(tmp_path / "wc.json", ["knight", "witch"])
        assert _run("expand-prompt", "--prompt", "a _hero_", "--wildcards", str(wildcards)) == 1
        assert "must hold a JSON object" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# extract-references
# ---------------------------------------------------------------------------

class TestExtractReferences:

    def test_missing_key_reports_error(self, tmp_path: Path, capsys):
        story = tmp_path / "story.txt"
        story.write_text("Mara runs to the warehouse.", encoding="utf-8")
        assert _run("extract-references", "--story", str(story)) == 1
        assert json.loads(capsys.readouterr().out) == {
            "success": False, "error": "Missing OPENAI_API_KEY",
        }

    def test_missing_story_file(self, tmp_path: Path, capsys):
        assert _run("extract-references", "--story", str(tmp_path / "none.txt")) == 1
        assert json.loads(capsys.readouterr().out)["success"] is False


def test_no_command_prints_help(capsys):
    assert _run() == 1
    assert "usage: directors-palette" in capsys.readouterr().out


def test_unknown_log_level_rejected(capsys):
    assert _run("--log-level", "loud", "transfer-status") == 2
    assert "invalid choice" in capsys.readouterr().err


def test_log_level_is_case_insensitive():
    assert _run("--log-level", "debug", "transfer-status") == 1
    assert logging.getLogger(ROOT_LOGGER).level == logging.DEBUG
