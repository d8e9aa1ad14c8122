"""Tests for the built-in language profiles."""

from __future__ import annotations

from pathlib import Path

import pytest

from textcat.category import DEFAULT_THRESHOLD, Categories
from textcat.defaults import available_languages, languages
from textcat.ngram import MAX_SERIALIZED_NGRAMS

BUILT_IN = ["dutch", "english", "french", "german", "italian", "portuguese", "spanish"]


class TestBuiltInLanguages:
    """Tests for the bundled language store."""

    def test_available_languages(self):
        assert available_languages() == BUILT_IN

    def test_languages_store(self):
        store = languages()
        assert store.categories() == BUILT_IN
        assert store.threshold == DEFAULT_THRESHOLD

    def test_each_call_returns_independent_store(self):
        first = languages()
        first.set_threshold(0.5)
        first.add_category("klingon", "tlhIngan Hol Dajatlh'a'")
        second = languages()
        assert second.threshold == DEFAULT_THRESHOLD
        assert second.categories() == BUILT_IN

    @pytest.mark.parametrize("text, expected", [
        ("The children walked along the road to the old school every morning.", "english"),
        ("Die Kinder liefen jeden Morgen die Straße entlang zur alten Schule.", "german"),
        ("Les enfants couraient sur la route jusqu'à la vieille école chaque matin.", "french"),
    ])
    def test_detects_language(self, text, expected):
        assert languages().get_category(text) == expected

    def test_profiles_hold_serialized_ngrams_only(self):
        for category in languages():
            assert 0 < len(category.ngrams) <= MAX_SERIALIZED_NGRAMS

    @pytest.mark.parametrize("text", [
        "the children walked to school",
        "Die Kinder liefen zur Schule.",
        "el perro corre por el bosque",
    ])
    def test_matches_persisted_copy(self, text, tmp_path: Path):
        path = tmp_path / "languages.json"
        languages().persist(path)
        reloaded = Categories.load(path)
        assert languages().get_categories(text) == reloaded.get_categories(text)
