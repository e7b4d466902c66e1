"""Tests for field template rendering."""

from anki_kotoba.templates import find_markers, render_field_template, unknown_markers


class TestRenderFieldTemplate:
    """Test marker substitution."""

    def test_basic_substitution(self):
        markers = {"expression": "猫", "reading": "ねこ"}
        assert render_field_template("{expression}: {reading}", markers) == "猫: ねこ"

    def test_unknown_marker_renders_empty(self):
        assert render_field_template("{unknown}", {}) == ""

    def test_repeated_markers(self):
        assert render_field_template("{a}-{a}-{a}", {"a": "x"}) == "x-x-x"

    def test_hyphenated_names(self):
        markers = {"glossary-first-brief": "cat"}
        assert render_field_template("<b>{glossary-first-brief}</b>", markers) == "<b>cat</b>"

    def test_substitution_not_recursive(self):
        """Test inserted values are not scanned for further markers."""
        markers = {"a": "{b}", "b": "x"}
        assert render_field_template("{a}", markers) == "{b}"

    def test_non_marker_braces_kept(self):
        """Test braces that do not form a marker are left alone."""
        assert render_field_template("{ spaced } {-x} {}", {"spaced": "y"}) == "{ spaced } {-x} {}"

    def test_newlines_preserved(self):
        markers = {"reading": "ねこ", "definition": "cat"}
        assert render_field_template("{reading}\n{definition}", markers) == "ねこ\ncat"

    def test_empty_template(self):
        assert render_field_template("", {"a": "x"}) == ""


class TestFindMarkers:
    """Test marker discovery for template checks."""

    def test_order_of_first_appearance(self):
        assert find_markers("{reading} {expression} {reading}") == ["reading", "expression"]

    def test_unknown_markers(self):
        template = "{expression} {glosary} {furigana-plain} {audio-file}"
        assert unknown_markers(template) == ["glosary", "audio-file"]

    def test_no_unknown_markers(self):
        assert unknown_markers("{expression}<br>{glossary}") == []
