"""Note settings: target deck/model, tags, field templates, duplicate policy.

Settings files are JSON. Keys may use the camelCase names the browser
extension stores (deckName, fieldTemplates, ...) or snake_case.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Tuple

from .templates import unknown_markers

logger = logging.getLogger(__name__)


class DuplicateScope(str, Enum):
    COLLECTION = "collection"
    DECK = "deck"
    DECK_ROOT = "deck-root"


def _default_field_templates() -> Dict[str, str]:
    return {"Front": "{expression}", "Back": "{reading}\n{definition}"}


@dataclass(frozen=True)
class AnkiSettings:
    """Settings used to assemble a note.

    Attributes:
        deck_name: Target deck
        model_name: Note type
        tags: Tags copied onto every note
        field_templates: Field name -> template using {marker} placeholders
        duplicate_scope: Where Anki looks for duplicates
        check_for_duplicates: Whether duplicates are rejected
    """
    deck_name: str = "Default"
    model_name: str = "Basic"
    tags: Tuple[str, ...] = ("kotoba",)
    field_templates: Dict[str, str] = field(default_factory=_default_field_templates)
    duplicate_scope: DuplicateScope = DuplicateScope.COLLECTION
    check_for_duplicates: bool = True


def parse_tags(tags_string: str) -> List[str]:
    """Parse an Anki tag string (space-separated) into a list of tags."""
    if not tags_string or not tags_string.strip():
        return []
    return [tag for tag in tags_string.split() if tag]


def _pick(data: dict, camel: str, snake: str, default):
    if camel in data:
        return data[camel]
    return data.get(snake, default)


def template_problems(settings: AnkiSettings) -> Dict[str, List[str]]:
    """Unknown marker names per field template (fields without problems omitted)."""
    problems: Dict[str, List[str]] = {}
    for field_name, template in settings.field_templates.items():
        unknown = unknown_markers(template)
        if unknown:
            problems[field_name] = unknown
    return problems


def settings_from_dict(data: dict) -> AnkiSettings:
    """Build settings from a parsed JSON object, filling defaults.

    Raises:
        ValueError: If tags, field templates, the duplicate scope or the
            duplicate check flag hold the wrong kind of value
    """
    defaults = AnkiSettings()

    raw_tags = _pick(data, "tags", "tags", list(defaults.tags))
    if isinstance(raw_tags, str):
        tags = parse_tags(raw_tags)
    elif isinstance(raw_tags, list) and all(isinstance(t, str) for t in raw_tags):
        tags = list(raw_tags)
    else:
        raise ValueError(f"Tags must be a string or a list of strings, got {raw_tags!r}")

    templates = _pick(data, "fieldTemplates", "field_templates", defaults.field_templates)
    if not isinstance(templates, dict) or not all(isinstance(v, str) for v in templates.values()):
        raise ValueError("Field templates must map field names to template strings")

    raw_scope = _pick(data, "duplicateScope", "duplicate_scope", defaults.duplicate_scope.value)
    try:
        scope = DuplicateScope(raw_scope)
    except ValueError:
        allowed = ", ".join(s.value for s in DuplicateScope)
        raise ValueError(f"Invalid duplicate scope {raw_scope!r} (expected one of: {allowed})")

    check_for_duplicates = _pick(
        data, "checkForDuplicates", "check_for_duplicates", defaults.check_for_duplicates
    )
    if not isinstance(check_for_duplicates, bool):
        raise ValueError(f"checkForDuplicates must be true or false, got {check_for_duplicates!r}")

    settings = AnkiSettings(
        deck_name=str(_pick(data, "deckName", "deck_name", defaults.deck_name)),
        model_name=str(_pick(data, "modelName", "model_name", defaults.model_name)),
        tags=tuple(tags),
        field_templates=dict(templates),
        duplicate_scope=scope,
        check_for_duplicates=check_for_duplicates,
    )

    for field_name, unknown in template_problems(settings).items():
        logger.warning(
            "Field %r references unknown markers (rendered empty): %s",
            field_name, ", ".join(unknown),
        )
    return settings


def load_settings(path: str | Path | None) -> AnkiSettings:
    """Load settings from JSON; a missing file yields the defaults.

    Raises:
        ValueError: If the JSON is invalid or holds invalid values
    """
    if path is None:
        return AnkiSettings()
    path = Path(path)
    if not path.exists():
        logger.info("Settings file %s not found; using defaults", path)
        return AnkiSettings()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in settings file: {e}")
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must hold a JSON object: {path}")
    return settings_from_dict(data)
