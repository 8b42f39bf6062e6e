"""
Tests for the part-of-speech first-note rules.
"""

from pathlib import Path

import pytest

from motifnotation import first_note_violation, load_motif_rules
from motifnotation.rules import PARTS_OF_SPEECH, MotifRules, load_motif_rules_from_path


class TestRuleTable:
    """Tests for the bundled rule file."""

    def test_bundled_rules(self):
        rules = load_motif_rules()
        assert rules.first_note_by_part == {
            "noun": "C",
            "pronoun": "C",
            "verb": "D",
            "adjective": "A",
            "adverb": "A",
            "preposition": "E",
            "conjunction": "G",
        }

    def test_every_part_of_speech_has_a_rule(self):
        rules = load_motif_rules()
        assert set(rules.first_note_by_part) == set(PARTS_OF_SPEECH)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_motif_rules_from_path(tmp_path / "nope.yaml")

    def test_unknown_part_rejected(self, tmp_path: Path):
        path = tmp_path / "rules.yaml"
        path.write_text("rules:\n  first_note:\n    interjection: C\n", encoding="utf-8")
        with pytest.raises(ValueError, match="interjection"):
            load_motif_rules_from_path(path)

    def test_bad_letter_rejected(self, tmp_path: Path):
        path = tmp_path / "rules.yaml"
        path.write_text("rules:\n  first_note:\n    noun: H\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_motif_rules_from_path(path)

    def test_lowercase_letter_normalized(self, tmp_path: Path):
        path = tmp_path / "rules.yaml"
        path.write_text("rules:\n  first_note:\n    noun: c\n", encoding="utf-8")
        assert load_motif_rules_from_path(path).required_first_note("noun") == "C"


class TestFirstNoteViolation:
    """Tests for first_note_violation."""

    def test_matching_first_note(self):
        assert first_note_violation("Cmaj", "noun") is None

    def test_mismatched_first_note(self):
        assert first_note_violation("Dmaj", "noun") == "Nouns must start with C"

    @pytest.mark.parametrize(
        "motif,part,expected",
        [
            ("CEG", "verb", "Verbs must start with D"),
            ("DEF", "adverb", "Adverbs must start with A"),
            ("CC", "conjunction", "Conjunctions must start with G"),
        ],
    )
    def test_message_names_part_and_letter(self, motif, part, expected):
        assert first_note_violation(motif, part) == expected

    def test_lowercase_first_note_matches(self):
        assert first_note_violation("d e", "verb") is None

    def test_leading_whitespace_ignored(self):
        assert first_note_violation("  A#", "adjective") is None

    @pytest.mark.parametrize("motif", ["", "   ", None])
    def test_empty_motif_not_checked(self, motif):
        assert first_note_violation(motif, "noun") is None

    @pytest.mark.parametrize("part", [None, "", "interjection"])
    def test_no_rule_for_part(self, part):
        assert first_note_violation("BBB", part) is None

    def test_custom_rules(self):
        rules = MotifRules(first_note_by_part={"noun": "G"})
        assert first_note_violation("G", "noun", rules=rules) is None
        assert first_note_violation("C", "noun", rules=rules) == "Nouns must start with G"
