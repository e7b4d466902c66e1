"""Reporting utilities for built notes."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List, Sequence

from .entries import Entry, KanjiEntry, NameEntry, WordEntry
from .ingest import write_csv
from .note_builder import NoteRecord


def format_tags(tags_list: Sequence[str]) -> str:
    """Format a tag list as an Anki tag string (space-separated)."""
    if not tags_list:
        return ""
    return " ".join(tags_list)


def notes_to_rows(notes: Iterable[NoteRecord]) -> List[dict]:
    """One row per note: field columns, then deck, model and tags."""
    rows = []
    for note in notes:
        row = dict(note.fields)
        row["deck"] = note.deck_name
        row["model"] = note.model_name
        row["tags"] = format_tags(note.tags)
        rows.append(row)
    return rows


def write_notes_csv(path: str | Path, notes: Iterable[NoteRecord]) -> None:
    write_csv(path, notes_to_rows(list(notes)))


def write_notes_json(path: str | Path, notes: Iterable[NoteRecord]) -> None:
    """Write notes as a JSON array of AnkiConnect addNote payloads."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [note.to_anki_connect() for note in notes]
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def _entry_kind(entry: Entry) -> str:
    if isinstance(entry, WordEntry):
        return "word"
    if isinstance(entry, KanjiEntry):
        return "kanji"
    if isinstance(entry, NameEntry):
        return "name"
    return "other"


def print_summary(entries: Sequence[Entry], notes: Sequence[NoteRecord]) -> None:
    """Print counts by entry type and fields that rendered empty."""
    counts = {"word": 0, "kanji": 0, "name": 0}
    for entry in entries:
        kind = _entry_kind(entry)
        counts[kind] = counts.get(kind, 0) + 1

    empty_fields: dict[str, int] = {}
    for note in notes:
        for field_name, value in note.fields.items():
            if not value.strip():
                empty_fields[field_name] = empty_fields.get(field_name, 0) + 1

    print("Note Build Summary:")
    for kind in ("word", "kanji", "name"):
        print(f"  {kind:>5}: {counts.get(kind, 0)}")
    print(f"  total: {len(notes)}")
    if empty_fields:
        print("  Empty fields:")
        for field_name, count in sorted(empty_fields.items()):
            print(f"    {field_name}: {count}")
