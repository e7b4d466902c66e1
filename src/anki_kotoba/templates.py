"""Field template rendering.

Templates reference markers as ``{marker-name}``. Rendering is a single
substitution pass: inserted values are never re-scanned, and names missing
from the marker map render as "" so templates written for newer marker
vocabularies still render.
"""

from __future__ import annotations

import re
from typing import List, Mapping

from .markers import is_known_marker

MARKER_PATTERN = re.compile(r"\{([\w][\w-]*)\}", re.ASCII)


def render_field_template(template: str, markers: Mapping[str, str]) -> str:
    if not template:
        return ""
    return MARKER_PATTERN.sub(lambda m: markers.get(m.group(1)) or "", template)


def find_markers(template: str) -> List[str]:
    """Marker names referenced by a template, in order of first appearance."""
    return list(dict.fromkeys(MARKER_PATTERN.findall(template or "")))


def unknown_markers(template: str) -> List[str]:
    """Referenced names outside the marker vocabulary (likely typos)."""
    return [name for name in find_markers(template) if not is_known_marker(name)]
