"""Bucket and collection naming.

Each searchable entity type gets its own Sonic bucket named after the
type, inside a collection named after the plural of that bucket:
``Post`` lives in ``Posts/Post``.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any

import inflect

from sonicscout.engines.base.exceptions import ConfigurationError

_inflector = inflect.engine()

# Trailing word of a CamelCase, snake_case or spaced name.
_LAST_WORD = re.compile(r"([A-Z]?[a-z]+|[A-Z]+|[a-z]+)$")


def _match_case(word: str, inflected: str) -> str:
    if word.isupper() and len(word) > 1:
        return inflected.upper()
    if word[:1].isupper():
        return inflected[:1].upper() + inflected[1:]
    return inflected


@lru_cache(maxsize=256)
def pluralize(name: str) -> str:
    """Pluralize the last word of ``name``, keeping its case.

    >>> pluralize("SearchableModel")
    'SearchableModels'
    >>> pluralize("blog_category")
    'blog_categories'
    """
    match = _LAST_WORD.search(name)
    if not match:
        return name
    word = match.group(1)
    plural = _inflector.plural_noun(word.lower()) or word.lower()
    return name[: match.start()] + _match_case(word, plural)


def bucket_for(record: Any) -> str:
    """Sonic bucket of a searchable record.

    Raises:
        ConfigurationError: If the record reports an empty bucket name.
    """
    bucket = record.searchable_as()
    if not bucket:
        raise ConfigurationError(f"{type(record).__name__}.searchable_as() returned an empty bucket name")
    return str(bucket)


def collection_for(record: Any) -> str:
    """Sonic collection of a searchable record."""
    return pluralize(bucket_for(record))
