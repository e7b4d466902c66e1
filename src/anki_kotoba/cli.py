"""CLI entrypoint for anki-kotoba.

Usage:
  python -m anki_kotoba.cli build --input entries.json --out out/notes.json
  python -m anki_kotoba.cli markers --input entries.json --index 0
  python -m anki_kotoba.cli furigana 食べる たべる
  python -m anki_kotoba.cli check-templates --settings resources/settings.json
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import Dict, List

from .entries import LookupContext, WordEntry
from .frequency import load_frequency_csv, with_frequency_rank
from .furigana import distribute_furigana, segments_to_html, segments_to_plain
from .ingest import read_entries_json
from .note_builder import build_anki_note, build_marker_map
from .report import print_summary, write_notes_csv, write_notes_json
from .settings import load_settings, template_problems


def _parse_overrides(pairs: List[str] | None) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise ValueError(f"Override must look like NAME=VALUE: {pair!r}")
        name, value = pair.split("=", 1)
        overrides[name.strip()] = value
    return overrides


def _context_from_args(args: argparse.Namespace) -> LookupContext:
    return LookupContext(
        url=getattr(args, "url", None),
        document_title=getattr(args, "title", None),
        sentence=getattr(args, "sentence", None),
    )


def cmd_build(args: argparse.Namespace) -> int:
    try:
        settings = load_settings(args.settings)
        entries = read_entries_json(args.input)
        overrides = _parse_overrides(args.override)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    print(f"Loaded {len(entries)} entries from: {args.input}")
    print(f"  Deck: {settings.deck_name}  Model: {settings.model_name}")

    if args.frequency:
        try:
            index = load_frequency_csv(args.frequency)
        except FileNotFoundError as e:
            print(f"Error: {e}")
            return 1
        print(f"Loaded frequency list from: {args.frequency} ({len(index)} pairs)")
        entries = [
            with_frequency_rank(e, index) if isinstance(e, WordEntry) and e.frequency_rank is None else e
            for e in entries
        ]

    context = _context_from_args(args)
    notes = [build_anki_note(e, settings, context, overrides) for e in entries]

    if str(args.out).lower().endswith(".csv"):
        write_notes_csv(args.out, notes)
    else:
        write_notes_json(args.out, notes)
    print_summary(entries, notes)
    print(f"Wrote notes: {args.out}")
    return 0


def cmd_markers(args: argparse.Namespace) -> int:
    try:
        entries = read_entries_json(args.input)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    if not 0 <= args.index < len(entries):
        print(f"Error: entry index {args.index} out of range (0-{len(entries) - 1})")
        return 1
    markers = build_marker_map(entries[args.index], _context_from_args(args))
    print(json.dumps(markers, ensure_ascii=False, indent=2))
    return 0


def cmd_furigana(args: argparse.Namespace) -> int:
    segments = distribute_furigana(args.expression, args.reading)
    print(segments_to_plain(segments))
    print(segments_to_html(segments))
    return 0


def cmd_check_templates(args: argparse.Namespace) -> int:
    try:
        settings = load_settings(args.settings)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    problems = template_problems(settings)
    for field_name in settings.field_templates:
        unknown = problems.get(field_name)
        status = f"unknown markers: {', '.join(unknown)}" if unknown else "ok"
        print(f"  {field_name}: {status}")
    if problems:
        print(f"Found unknown markers in {len(problems)} field(s)")
        return 1
    print("All field templates use known markers")
    return 0


def _add_context_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--url", help="URL of the page where the word was looked up")
    p.add_argument("--title", help="Title of that page")
    p.add_argument("--sentence", help="Sentence containing the word")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ankikotoba", description="Build Anki notes from Japanese dictionary lookups")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    build = sub.add_parser("build", help="Build notes from lookup entries")
    build.add_argument("--input", required=True, help="Path to entries (JSON object, array, or JSON Lines)")
    build.add_argument("--out", required=True, help="Output path (.json for AnkiConnect payloads, .csv for import)")
    build.add_argument(
        "--settings",
        default="resources/settings.json",
        help="Path to settings JSON (optional; defaults will be used if missing)",
    )
    build.add_argument("--frequency", help="Path to Word,Form,Rank frequency CSV")
    build.add_argument(
        "--override",
        action="append",
        metavar="NAME=VALUE",
        help="Marker value taking precedence over the computed one (repeatable)",
    )
    _add_context_args(build)
    build.set_defaults(func=cmd_build)

    markers = sub.add_parser("markers", help="Print every marker value for one entry")
    markers.add_argument("--input", required=True, help="Path to entries")
    markers.add_argument("--index", type=int, default=0, help="Entry index within the file (default: 0)")
    _add_context_args(markers)
    markers.set_defaults(func=cmd_markers)

    furigana = sub.add_parser("furigana", help="Show furigana for an expression and its reading")
    furigana.add_argument("expression")
    furigana.add_argument("reading")
    furigana.set_defaults(func=cmd_furigana)

    check = sub.add_parser("check-templates", help="Report unknown markers in field templates")
    check.add_argument(
        "--settings",
        default="resources/settings.json",
        help="Path to settings JSON (default: resources/settings.json)",
    )
    check.set_defaults(func=cmd_check_templates)

    return p


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
