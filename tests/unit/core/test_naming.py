"""Tests for bucket and collection naming."""

from __future__ import annotations

import pytest

from sonicscout.core.naming import bucket_for, collection_for, pluralize
from sonicscout.engines.base.exceptions import ConfigurationError
from tests.conftest import SearchableModel


class TestPluralize:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("SearchableModel", "SearchableModels"),
            ("Post", "Posts"),
            ("category", "categories"),
            ("blog_category", "blog_categories"),
            ("BlogEntry", "BlogEntries"),
            ("USER", "USERS"),
        ],
    )
    def test_last_word_pluralized(self, name: str, expected: str) -> None:
        assert pluralize(name) == expected

    def test_name_without_letters_unchanged(self) -> None:
        assert pluralize("2024") == "2024"


class TestBuckets:
    def test_bucket_is_searchable_as(self) -> None:
        assert bucket_for(SearchableModel(1)) == "SearchableModel"

    def test_collection_is_plural_bucket(self) -> None:
        assert collection_for(SearchableModel(1)) == "SearchableModels"

    def test_empty_bucket_rejected(self) -> None:
        class Nameless(SearchableModel):
            def searchable_as(self) -> str:
                return ""

        with pytest.raises(ConfigurationError):
            bucket_for(Nameless(1))
