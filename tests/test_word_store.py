"""
Tests for the SQLAlchemy word store.
"""

import pytest

from motifia_backend.domain.words import WordDraft
from motifia_backend.infra.word_store import WordConflictError, WordNotFoundError, WordStore


class TestCreate:
    """Tests for WordStore.create."""

    def test_create_is_queued(self, store: WordStore):
        record = store.create(WordDraft.build(word="Cat", part_of_speech="noun", motif="CEG"))
        assert record.id > 0
        assert record.word == "cat"
        assert record.status == "queued"
        assert record.created_at is not None
        assert record.created_at.endswith("+00:00")

    def test_duplicate_is_case_insensitive(self, store: WordStore):
        store.create(WordDraft.build(word="cat"))
        with pytest.raises(WordConflictError, match="This word already exists"):
            store.create(WordDraft.build(word="CAT"))

    def test_optional_fields_absent(self, store: WordStore):
        record = store.create(WordDraft.build(word="lonely"))
        assert record.part_of_speech is None
        assert record.motif is None
        assert record.mnemonic is None


class TestQueries:
    """Tests for lookups and listing."""

    def test_list_sorted_by_word(self, store: WordStore, sample_words):
        assert [w.word for w in store.list_words()] == ["cat", "quick", "run"]

    def test_list_by_status(self, store: WordStore, sample_words):
        store.accept(sample_words["run"])
        assert [w.word for w in store.list_words(status="accepted")] == ["run"]
        assert [w.word for w in store.list_words(status="queued")] == ["cat", "quick"]

    def test_list_bad_status(self, store: WordStore):
        with pytest.raises(ValueError):
            store.list_words(status="rejected")

    def test_get(self, store: WordStore, sample_words):
        assert store.get(sample_words["cat"]).mnemonic == "three notes"

    def test_get_missing(self, store: WordStore):
        with pytest.raises(WordNotFoundError):
            store.get(999)

    def test_get_by_key(self, store: WordStore, sample_words):
        assert store.get_by_key("  QUICK ").id == sample_words["quick"]
        assert store.get_by_key("slow") is None
        assert store.get_by_key("") is None

    def test_get_by_motif(self, store: WordStore, sample_words):
        assert store.get_by_motif("df#a").word == "run"
        assert store.get_by_motif("GGG") is None
        assert store.get_by_motif(" ") is None


class TestUpdate:
    """Tests for update, accept and delete."""

    def test_partial_update(self, store: WordStore, sample_words):
        record = store.update(sample_words["cat"], {"mnemonic": "meow"})
        assert record.mnemonic == "meow"
        assert record.motif == "CEG"

    def test_rename(self, store: WordStore, sample_words):
        record = store.update(sample_words["cat"], {"word": "Kitten"})
        assert record.word == "kitten"
        assert store.get_by_key("cat") is None

    def test_rename_to_existing_conflicts(self, store: WordStore, sample_words):
        with pytest.raises(WordConflictError):
            store.update(sample_words["cat"], {"word": "RUN"})

    def test_rename_to_same_key(self, store: WordStore, sample_words):
        assert store.update(sample_words["cat"], {"word": "cat"}).word == "cat"

    def test_update_validates(self, store: WordStore, sample_words):
        with pytest.raises(ValueError):
            store.update(sample_words["cat"], {"motif": "C-E"})

    def test_update_missing(self, store: WordStore):
        with pytest.raises(WordNotFoundError):
            store.update(42, {"mnemonic": "x"})

    def test_accept(self, store: WordStore, sample_words):
        assert store.accept(sample_words["quick"]).status == "accepted"

    def test_delete(self, store: WordStore, sample_words):
        store.delete(sample_words["cat"])
        with pytest.raises(WordNotFoundError):
            store.get(sample_words["cat"])
        with pytest.raises(WordNotFoundError):
            store.delete(sample_words["cat"])

    def test_delete_frees_key(self, store: WordStore, sample_words):
        store.delete(sample_words["cat"])
        assert store.create(WordDraft.build(word="cat")).word == "cat"


class TestListFilters:
    """Tests for dictionary search and part-of-speech filtering."""

    def test_substring_search_is_case_insensitive(self, store: WordStore, sample_words):
        assert [w.word for w in store.list_words(q="UI")] == ["quick"]
        assert [w.word for w in store.list_words(q="u")] == ["quick", "run"]

    def test_blank_search_matches_all(self, store: WordStore, sample_words):
        assert len(store.list_words(q="  ")) == 3

    def test_search_wildcards_are_literal(self, store: WordStore, sample_words):
        assert store.list_words(q="%") == []
        assert store.list_words(q="_") == []

    def test_part_of_speech(self, store: WordStore, sample_words):
        assert [w.word for w in store.list_words(part_of_speech="Adjective")] == ["quick"]

    def test_unknown_part_of_speech(self, store: WordStore):
        with pytest.raises(ValueError, match="Unknown part of speech"):
            store.list_words(part_of_speech="interjection")

    def test_combined_with_status(self, store: WordStore, sample_words):
        store.accept(sample_words["quick"])
        assert [w.word for w in store.list_words(status="accepted", q="q", part_of_speech="adjective")] == ["quick"]
        assert store.list_words(status="accepted", part_of_speech="verb") == []
