"""directors-palette CLI entry point."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

_SEPARATORS = {"newline": "\n", "blank-line": "\n\n", "comma": ", "}
_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="directors-palette",
        description="Director's Palette: shot export and post-production transfer",
    )
    parser.add_argument("--log-level", default=None, type=str.upper, choices=_LOG_LEVELS,
                        help="Override DIRECTORS_PALETTE_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    export_parser = sub.add_parser("export", help="Format a shot list for generation tools")
    export_parser.add_argument("--shots", required=True, metavar="shots.json",
                               help="JSON array of shots, or an object with a 'shots' array")
    export_parser.add_argument("--format", choices=["text", "numbered", "json", "csv"], default="text")
    export_parser.add_argument("--separator", choices=sorted(_SEPARATORS), default="newline")
    export_parser.add_argument("--prefix", default="")
    export_parser.add_argument("--suffix", default="")
    export_parser.add_argument("--artist", default=None, help="Value for @artist / @artist-tag")
    export_parser.add_argument("--artist-description", default=None, help="Value for @artist-desc")
    export_parser.add_argument("--use-artist-descriptions", action="store_true",
                               help="Render @artist as the artist description")
    export_parser.add_argument("--director", default=None, help="Value for @director")
    export_parser.add_argument("--location", default=None, help="Value for @location")
    export_parser.add_argument("--include-metadata", action="store_true")
    export_parser.add_argument("--project-type", choices=["story", "music-video"], default="story")
    out_group = export_parser.add_mutually_exclusive_group()
    out_group.add_argument("--output", metavar="FILE", help="Write to FILE instead of stdout")
    out_group.add_argument("--output-dir", metavar="DIR", help="Write to DIR under a suggested filename")

    store_parser = sub.add_parser("transfer-store", help="Convert a breakdown and queue it for post-production")
    store_parser.add_argument("--breakdown", required=True, metavar="breakdown.json",
                              help="JSON array of chapters/sections, or an object with 'chapters' or 'sections'")
    store_parser.add_argument("--project-id", required=True)
    store_parser.add_argument("--project-type", choices=["story", "music-video"], default="story")
    store_parser.add_argument("--store-dir", default=None, help="Override DIRECTORS_PALETTE_TRANSFER_DIR")

    retrieve_parser = sub.add_parser("transfer-retrieve", help="Consume queued post-production shots")
    retrieve_parser.add_argument("--store-dir", default=None)
    retrieve_parser.add_argument("--output", metavar="FILE", default=None)

    status_parser = sub.add_parser("transfer-status", help="Report whether shots are queued")
    status_parser.add_argument("--store-dir", default=None)

    expand_parser = sub.add_parser("expand-prompt", help="Expand [options] and _wildcards_ in a prompt")
    expand_parser.add_argument("--prompt", required=True)
    expand_parser.add_argument("--wildcards", metavar="wildcards.json", default=None,
                               help="JSON object mapping wildcard name to newline-separated entries")
    expand_parser.add_argument("--credits-per-image", type=int, default=None)

    refs_parser = sub.add_parser("extract-references", help="Extract @references from a story with the LLM")
    refs_parser.add_argument("--story", required=True, metavar="story.txt")
    refs_parser.add_argument("--director", default="")
    refs_parser.add_argument("--notes", default="")

    args = parser.parse_args(argv)

    from directors_palette.config import get_settings
    from directors_palette.logging_config import setup_logging

    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)

    if args.command == "export":
        sys.exit(_run_export(args))
    elif args.command == "transfer-store":
        sys.exit(_run_transfer_store(args, settings))
    elif args.command == "transfer-retrieve":
        sys.exit(_run_transfer_retrieve(args, settings))
    elif args.command == "transfer-status":
        from directors_palette.transfer import has_transferred_shots
        if has_transferred_shots(_file_store(args, settings)):
            print("OK: shots waiting for transfer")
            sys.exit(0)
        print("No shots waiting for transfer")
        sys.exit(1)
    elif args.command == "expand-prompt":
        sys.exit(_run_expand_prompt(args))
    elif args.command == "extract-references":
        sys.exit(_run_extract_references(args, settings))
    else:
        parser.print_help()
        sys.exit(1)


def _file_store(args, settings):
    from directors_palette.transfer import FileSessionStore
    return FileSessionStore(Path(args.store_dir) if args.store_dir else settings.transfer_dir)


def _read_json(path: Path):
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ValueError(f"File not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


def _run_export(args) -> int:
    """Export shots; JSON output is validated BEFORE anything is written."""
    import jsonschema
    from pydantic import ValidationError

    from directors_palette.contract_validate import validate_export_document
    from directors_palette.exceptions import DirectorsPaletteError
    from directors_palette.export import (
        get_suggested_filename,
        process_shots_for_export,
        write_export_file,
    )
    from directors_palette.models import ExportConfig, ExportVariables
    from directors_palette.schemas.shots_v1 import load_shots

    try:
        shots = load_shots(_read_json(Path(args.shots)))
    except (ValueError, ValidationError) as exc:
        print(f"ERROR: invalid shots — {exc}")
        return 1

    config = ExportConfig(
        prefix=args.prefix,
        suffix=args.suffix,
        use_artist_descriptions=args.use_artist_descriptions,
        format=args.format,
        separator=_SEPARATORS[args.separator],
        include_metadata=args.include_metadata,
    )
    variables = ExportVariables(
        artist_name=args.artist,
        artist_description=args.artist_description,
        director=args.director,
        location=args.location,
    )
    result = process_shots_for_export(shots, config, variables)

    if args.format == "json":
        try:
            validate_export_document(result.formatted_text)
        except jsonschema.ValidationError as exc:
            print(f"ERROR: invalid export — {exc.message}")
            return 1

    if args.output_dir:
        target = Path(args.output_dir) / get_suggested_filename(config, args.project_type, args.artist)
    elif args.output:
        target = Path(args.output)
    else:
        print(result.formatted_text)
        return 0

    try:
        write_export_file(result.formatted_text, target)
    except DirectorsPaletteError as exc:
        print(f"ERROR: export failed — {exc.message}")
        return 1
    print(f"OK: exported {result.total_shots} shots to {target}")
    return 0


def _breakdown_items(data, key: str) -> list:
    if isinstance(data, dict):
        return data.get(key, [])
    return data


def _run_transfer_store(args, settings) -> int:
    from pydantic import TypeAdapter, ValidationError

    from directors_palette.models import ChapterBreakdown, SectionBreakdown
    from directors_palette.transfer import (
        convert_music_video_shots,
        convert_story_shots,
        store_shots_for_transfer,
    )

    try:
        data = _read_json(Path(args.breakdown))
        if args.project_type == "story":
            chapters = TypeAdapter(List[ChapterBreakdown]).validate_python(_breakdown_items(data, "chapters"))
            shots = convert_story_shots(chapters, args.project_id)
        else:
            sections = TypeAdapter(List[SectionBreakdown]).validate_python(_breakdown_items(data, "sections"))
            shots = convert_music_video_shots(sections, args.project_id)
    except (ValueError, ValidationError) as exc:
        print(f"ERROR: invalid breakdown — {exc}")
        return 1

    try:
        store_shots_for_transfer(shots, _file_store(args, settings))
    except OSError as exc:
        print(f"ERROR: {exc}")
        return 1
    print(f"OK: stored {len(shots)} shots for transfer")
    return 0


def _run_transfer_retrieve(args, settings) -> int:
    """Consume the slot; if the output cannot be written the shots are re-queued."""
    from directors_palette.exceptions import ExportError
    from directors_palette.export import write_export_file
    from directors_palette.transfer import retrieve_transferred_shots, store_shots_for_transfer

    store = _file_store(args, settings)
    shots = retrieve_transferred_shots(store)
    if shots is None:
        print("ERROR: no transferred shots")
        return 1

    payload = json.dumps([s.to_wire() for s in shots], indent=2, ensure_ascii=False)
    if args.output:
        try:
            write_export_file(payload, args.output)
        except ExportError as exc:
            store_shots_for_transfer(shots, store)
            print(f"ERROR: {exc.message} — shots left queued")
            return 1
        print(f"OK: retrieved {len(shots)} shots to {args.output}")
    else:
        print(payload)
    return 0


def _run_expand_prompt(args) -> int:
    from directors_palette.prompting import (
        WildCard,
        calculate_dynamic_prompt_cost,
        parse_dynamic_prompt,
        validate_bracket_syntax,
    )

    wildcards = []
    if args.wildcards:
        try:
            raw = _read_json(Path(args.wildcards))
        except ValueError as exc:
            print(f"ERROR: {exc}")
            return 1
        if not isinstance(raw, dict):
            print(f"ERROR: {args.wildcards} must hold a JSON object of name to entries")
            return 1
        wildcards = [WildCard(name=name, content=content) for name, content in raw.items()]

    syntax = validate_bracket_syntax(args.prompt)
    if not syntax["is_valid"]:
        print(f"ERROR: {syntax['error']} ({syntax['suggestion']})")
        return 1

    result = parse_dynamic_prompt(args.prompt, user_wildcards=wildcards)
    for warning in result.warnings:
        print(f"# {warning}", file=sys.stderr)
    if not result.is_valid:
        print("ERROR: prompt cannot be expanded")
        return 1

    for prompt in result.expanded_prompts:
        print(prompt)
    if args.credits_per_image is not None:
        cost = calculate_dynamic_prompt_cost(
            args.prompt, args.credits_per_image, user_wildcards=wildcards
        )
        print(f"# {cost['image_count']} images, {cost['total_cost']} credits", file=sys.stderr)
    return 0


def _run_extract_references(args, settings) -> int:
    """Print a {success, data|error} document, mirroring the HTTP action shape."""
    from directors_palette.exceptions import DirectorsPaletteError
    from directors_palette.references import extract_story_references

    try:
        story = Path(args.story).read_text(encoding="utf-8")
    except FileNotFoundError:
        print(json.dumps({"success": False, "error": f"Story file not found: {args.story}"}))
        return 1

    try:
        references = extract_story_references(
            story, args.director, args.notes, settings=settings
        )
    except DirectorsPaletteError as exc:
        print(json.dumps({"success": False, "error": exc.message}))
        return 1

    print(json.dumps({"success": True, "data": references.to_wire()}, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    main()
