"""Tests for sense list serialization."""

from anki_kotoba.entries import Gloss, Sense
from anki_kotoba.glossary import (
    glosses_to_str,
    serialize_glossary,
    serialize_sense_full,
    serialize_senses_html,
    serialize_senses_plain,
)


def _sense(*glosses, **kwargs):
    return Sense(glosses=tuple(Gloss(g) for g in glosses), **kwargs)


class TestSingleSense:
    """Test single-sense renderings."""

    def test_plain_gloss(self):
        """Test a bare gloss renders identically in full and brief forms."""
        senses = [_sense("cat")]
        assert serialize_senses_html(senses) == "cat"
        assert serialize_senses_html(senses, brief=True) == "cat"
        assert serialize_senses_plain(senses) == "cat"

    def test_glosses_joined_with_semicolons(self):
        assert glosses_to_str(_sense("to eat", "to live on")) == "to eat; to live on"

    def test_trademark_glyph(self):
        sense = Sense(glosses=(Gloss("Walkman", trademark=True), Gloss("portable player")))
        assert glosses_to_str(sense) == "Walkman™; portable player"

    def test_full_form_order(self):
        """Test POS, field, misc parentheticals precede glosses and the note follows."""
        sense = _sense("cat", pos=("n",), field=("zool",), misc=("uk",), info="also used for tabby")
        assert serialize_sense_full(sense) == "<i>(n)</i> (zool) (uk) cat (also used for tabby)"

    def test_multiple_tags_comma_joined(self):
        sense = _sense("to eat", pos=("v1", "vt"))
        assert serialize_sense_full(sense) == "<i>(v1, vt)</i> to eat"

    def test_brief_omits_tags(self):
        senses = [_sense("to eat", pos=("v1",), info="note")]
        assert serialize_senses_html(senses, brief=True) == "to eat"


class TestMultipleSenses:
    """Test numbering and bullets across senses."""

    def test_html_numbering(self):
        senses = [_sense("a"), _sense("b")]
        assert serialize_senses_html(senses, brief=True) == "(1) a<br>(2) b"

    def test_native_language_senses_use_bullets(self):
        """Test native-language senses do not consume a number."""
        senses = [_sense("a"), _sense("b", lang="de"), _sense("c", lang="en")]
        assert serialize_senses_html(senses, brief=True) == "(1) a<br>• b<br>(2) c"

    def test_html_full_form(self):
        senses = [_sense("a", pos=("n",)), _sense("b")]
        assert serialize_senses_html(senses) == "(1) <i>(n)</i> a<br>(2) b"

    def test_plain_numbers_every_sense(self):
        """Test plain numbering uses position, regardless of language."""
        senses = [_sense("a"), _sense("b", lang="de"), _sense("c")]
        assert serialize_senses_plain(senses) == "(1) a\n(2) b\n(3) c"


class TestEmptyAndBundle:
    """Test empty input and the bundled renderings."""

    def test_empty_senses(self):
        assert serialize_senses_html([]) == ""
        assert serialize_senses_html([], brief=True) == ""
        assert serialize_senses_plain([]) == ""

    def test_empty_bundle(self):
        bundle = serialize_glossary([])
        assert (bundle.full, bundle.brief, bundle.plain, bundle.first_full, bundle.first_brief) == (
            "", "", "", "", ""
        )

    def test_bundle_first_sense(self):
        bundle = serialize_glossary([_sense("a", pos=("n",)), _sense("b")])
        assert bundle.first_full == "<i>(n)</i> a"
        assert bundle.first_brief == "a"
        assert bundle.plain == "(1) a\n(2) b"
