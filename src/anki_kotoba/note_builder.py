"""Assemble Anki notes from lookup entries and settings.

Pipeline: entry + context -> marker map (+ caller overrides) -> one rendered
string per field template -> NoteRecord with the duplicate policy attached.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from .entries import Entry, LookupContext
from .markers import MarkerMap, build_marker_values
from .settings import AnkiSettings, DuplicateScope
from .templates import render_field_template


@dataclass(frozen=True)
class DuplicateScopeOptions:
    deck_name: str
    check_children: bool = True
    check_all_models: bool = False


@dataclass(frozen=True)
class NoteOptions:
    allow_duplicate: bool
    duplicate_scope: DuplicateScope
    duplicate_scope_options: DuplicateScopeOptions


@dataclass(frozen=True)
class NoteRecord:
    """A finished note, ready for the note submission client.

    Attributes:
        deck_name: Target deck
        model_name: Note type
        fields: Field name -> rendered value
        tags: Note tags
        options: Duplicate handling policy
    """
    deck_name: str
    model_name: str
    fields: Dict[str, str]
    tags: List[str]
    options: NoteOptions

    def to_anki_connect(self) -> dict:
        """AnkiConnect ``addNote`` payload for this note."""
        scope_options = self.options.duplicate_scope_options
        return {
            "deckName": self.deck_name,
            "modelName": self.model_name,
            "fields": dict(self.fields),
            "tags": list(self.tags),
            "options": {
                "allowDuplicate": self.options.allow_duplicate,
                "duplicateScope": self.options.duplicate_scope.value,
                "duplicateScopeOptions": {
                    "deckName": scope_options.deck_name,
                    "checkChildren": scope_options.check_children,
                    "checkAllModels": scope_options.check_all_models,
                },
            },
        }


def assemble_note(markers: Mapping[str, str], settings: AnkiSettings) -> NoteRecord:
    """Render every field template and attach deck, tags, and duplicate policy."""
    fields = {
        field_name: render_field_template(template, markers)
        for field_name, template in settings.field_templates.items()
    }
    return NoteRecord(
        deck_name=settings.deck_name,
        model_name=settings.model_name,
        fields=fields,
        tags=list(settings.tags),
        options=NoteOptions(
            allow_duplicate=not settings.check_for_duplicates,
            duplicate_scope=settings.duplicate_scope,
            duplicate_scope_options=DuplicateScopeOptions(deck_name=settings.deck_name),
        ),
    )


def build_marker_map(
    entry: Entry,
    context: Optional[LookupContext] = None,
    marker_overrides: Optional[Mapping[str, str]] = None,
) -> MarkerMap:
    """Computed markers with caller-supplied overrides applied on top.

    Overrides carry values this package cannot compute (e.g. an audio
    filename stored out-of-band); they win over computed values.
    """
    markers = build_marker_values(entry, context)
    if marker_overrides:
        markers.update(marker_overrides)
    return markers


def build_anki_note(
    entry: Entry,
    settings: AnkiSettings,
    context: Optional[LookupContext] = None,
    marker_overrides: Optional[Mapping[str, str]] = None,
) -> NoteRecord:
    return assemble_note(build_marker_map(entry, context, marker_overrides), settings)
