"""Tests for settings loading."""

import json
import logging
import tempfile
from pathlib import Path

import pytest
from anki_kotoba.settings import (
    AnkiSettings,
    DuplicateScope,
    load_settings,
    parse_tags,
    settings_from_dict,
    template_problems,
)


def _write_json(tmpdir, data, name="settings.json"):
    path = Path(tmpdir) / name
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


class TestDefaults:
    """Test default settings."""

    def test_default_values(self):
        settings = AnkiSettings()
        assert settings.deck_name == "Default"
        assert settings.model_name == "Basic"
        assert settings.tags == ("kotoba",)
        assert settings.field_templates == {"Front": "{expression}", "Back": "{reading}\n{definition}"}
        assert settings.duplicate_scope == DuplicateScope.COLLECTION
        assert settings.check_for_duplicates is True

    def test_missing_file_gives_defaults(self):
        assert load_settings("/nonexistent/settings.json") == AnkiSettings()

    def test_none_path_gives_defaults(self):
        assert load_settings(None) == AnkiSettings()


class TestParseTags:
    """Test Anki tag string parsing."""

    def test_space_separated(self):
        assert parse_tags("japanese  vocab ") == ["japanese", "vocab"]

    def test_empty(self):
        assert parse_tags("") == []
        assert parse_tags("   ") == []


class TestSettingsFromDict:
    """Test building settings from parsed JSON."""

    def test_camel_case_keys(self):
        settings = settings_from_dict({
            "deckName": "Japanese::Mining",
            "modelName": "Yomitan",
            "tags": ["mined", "vocab"],
            "fieldTemplates": {"Word": "{expression}", "Meaning": "{glossary}"},
            "duplicateScope": "deck-root",
            "checkForDuplicates": False,
        })
        assert settings.deck_name == "Japanese::Mining"
        assert settings.model_name == "Yomitan"
        assert settings.tags == ("mined", "vocab")
        assert settings.field_templates == {"Word": "{expression}", "Meaning": "{glossary}"}
        assert settings.duplicate_scope == DuplicateScope.DECK_ROOT
        assert settings.check_for_duplicates is False

    def test_snake_case_keys_and_tag_string(self):
        settings = settings_from_dict({
            "deck_name": "Mining",
            "tags": "mined japanese",
            "duplicate_scope": "deck",
        })
        assert settings.deck_name == "Mining"
        assert settings.tags == ("mined", "japanese")
        assert settings.duplicate_scope == DuplicateScope.DECK
        assert settings.model_name == "Basic"

    def test_invalid_scope_raises(self):
        with pytest.raises(ValueError, match="Invalid duplicate scope"):
            settings_from_dict({"duplicateScope": "everywhere"})

    def test_invalid_templates_raise(self):
        with pytest.raises(ValueError, match="Field templates"):
            settings_from_dict({"fieldTemplates": {"Front": 3}})

    @pytest.mark.parametrize("tags", [None, 3, {"a": 1}, ["ok", 2]])
    def test_invalid_tags_raise(self, tags):
        with pytest.raises(ValueError, match="Tags must be"):
            settings_from_dict({"tags": tags})

    @pytest.mark.parametrize("flag", ["false", "true", 0, 1, None])
    def test_duplicate_check_flag_must_be_boolean(self, flag):
        """Test a JSON string like "false" is rejected rather than read as true."""
        with pytest.raises(ValueError, match="checkForDuplicates"):
            settings_from_dict({"checkForDuplicates": flag})

    def test_snake_case_duplicate_check_flag(self):
        assert settings_from_dict({"check_for_duplicates": False}).check_for_duplicates is False

    def test_unknown_markers_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="anki_kotoba.settings"):
            settings = settings_from_dict({"fieldTemplates": {"Front": "{expresion}"}})
        assert settings.field_templates == {"Front": "{expresion}"}
        assert "expresion" in caplog.text

    def test_template_problems(self):
        settings = settings_from_dict({
            "fieldTemplates": {"Front": "{expression}", "Back": "{definiton} {audio}"}
        })
        assert template_problems(settings) == {"Back": ["definiton"]}


class TestLoadSettings:
    """Test loading settings files."""

    def test_load_valid_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_json(tmpdir, {"deckName": "Mining", "tags": []})
            settings = load_settings(path)
        assert settings.deck_name == "Mining"
        assert settings.tags == ()

    def test_invalid_json_raises(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "settings.json"
            path.write_text("{invalid json}", encoding="utf-8")
            with pytest.raises(ValueError, match="Invalid JSON"):
                load_settings(path)

    def test_non_object_raises(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_json(tmpdir, ["not", "an", "object"])
            with pytest.raises(ValueError, match="JSON object"):
                load_settings(path)
