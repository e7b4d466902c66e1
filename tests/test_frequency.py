"""Tests for frequency rank lookup."""

import logging
import tempfile
from pathlib import Path

import pytest
from anki_kotoba.entries import Gloss, KanjiHeadword, Reading, Sense, WordEntry
from anki_kotoba.frequency import FrequencyIndex, load_frequency_csv, with_frequency_rank

CSV_TEXT = "\n".join([
    "Word,Form,Rank",
    "生,なま,2457",
    "生,せい,3483",
    "眼鏡,メガネ,5000",
    "なる,なる,100",
    "成る,なる,800",
    "broken line",
    "x,y,notanumber",
    "",
])


@pytest.fixture
def index():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "freq.csv"
        path.write_text(CSV_TEXT, encoding="utf-8")
        yield load_frequency_csv(path)


class TestLoadFrequencyCsv:
    """Test CSV loading."""

    def test_pairs_loaded(self, index):
        assert len(index) == 5

    def test_missing_file_raises(self):
        with pytest.raises(FileNotFoundError):
            load_frequency_csv("/nonexistent/freq.csv")

    def test_form_with_comma(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "freq.csv"
            path.write_text("Word,Form,Rank\nA,b,c,42\n", encoding="utf-8")
            loaded = load_frequency_csv(path)
        assert loaded.lookup("A", "b,c") == 42

    def test_load_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="anki_kotoba.frequency"):
            with tempfile.TemporaryDirectory() as tmpdir:
                path = Path(tmpdir) / "freq.csv"
                path.write_text(CSV_TEXT, encoding="utf-8")
                load_frequency_csv(path)
        assert "Loaded 5 frequency entries" in caplog.text


class TestLookup:
    """Test pair and single-form lookups."""

    def test_exact_pair(self, index):
        assert index.lookup("生", "なま") == 2457
        assert index.lookup("生", "せい") == 3483

    def test_pair_only_when_both_given(self, index):
        """Test a known kanji with an unlisted reading does not borrow a rank."""
        assert index.lookup("生", "き") is None

    def test_katakana_folded(self, index):
        assert index.lookup("眼鏡", "めがね") == 5000
        assert index.lookup("眼鏡", "メガネ") == 5000
        assert index.lookup(None, "メガネ") == 5000

    def test_single_form_takes_best_rank(self, index):
        assert index.lookup(None, "なる") == 100
        assert index.lookup("成る", None) == 800
        assert index.lookup("生", None) == 2457

    def test_nothing_given(self, index):
        assert index.lookup(None, None) is None
        assert index.lookup("", "") is None

    def test_lower_rank_wins_on_duplicate_pair(self):
        freq = FrequencyIndex()
        freq.add("猫", "ねこ", 900)
        freq.add("猫", "ねこ", 300)
        freq.add("猫", "ねこ", 600)
        assert freq.lookup("猫", "ねこ") == 300


class TestWithFrequencyRank:
    """Test attaching ranks to word entries."""

    def test_rank_attached(self, index):
        word = WordEntry(
            kanji=(KanjiHeadword("眼鏡"),),
            readings=(Reading("めがね"),),
            senses=(Sense(glosses=(Gloss("glasses"),)),),
        )
        ranked = with_frequency_rank(word, index)
        assert ranked.frequency_rank == 5000
        assert word.frequency_rank is None

    def test_search_only_headword_falls_back_to_reading(self, index):
        word = WordEntry(
            kanji=(KanjiHeadword("生", search_only=True),),
            readings=(Reading("せい"),),
            senses=(),
        )
        assert with_frequency_rank(word, index).frequency_rank == 3483

    def test_unknown_word_unchanged(self, index):
        word = WordEntry(kanji=(), readings=(Reading("ぬこ"),), senses=())
        assert with_frequency_rank(word, index) is word
