"""JSON ingest for lookup results and CSV output helpers.

Input: a JSON object (one entry), a JSON array of entries, or JSON Lines.
Each entry is {"type": "word" | "kanji" | "name", "data": {...}}.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Iterable, List

from .entries import Entry, entry_from_dict


def read_entries_json(path: str | Path) -> List[Entry]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Entries file not found: {path}")
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        # Not a single document; try JSON Lines
        try:
            data = [json.loads(line) for line in text.splitlines() if line.strip()]
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in entries file {path}: {e}")
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ValueError(f"Entries file must hold an object or a list: {path}")
    return [entry_from_dict(item) for item in data]


def write_csv(path: str | Path, rows: Iterable[dict]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = list(rows)
    if not rows:
        # Write empty file with no rows
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write("")
        return
    fieldnames = list(rows[0].keys())
    for r in rows[1:]:
        for key in r:
            if key not in fieldnames:
                fieldnames.append(key)
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, restval="")
        writer.writeheader()
        for r in rows:
            writer.writerow(r)
