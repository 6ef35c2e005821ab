"""Record protocols — What engines need from the host's searchable records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sonicscout.models.builder import SearchBuilder


@runtime_checkable
class Searchable(Protocol):
    """A record that can be pushed to and found in a search index.

    Records may additionally define ``get_sonic_locale()`` returning an
    ISO 639-3 code (or ``"none"``) to pin Sonic's lexer language.
    """

    def searchable_as(self) -> str:
        """Bucket name for this entity type."""

    def get_search_key(self) -> Any:
        """Primary key stored as the Sonic object identifier."""

    def to_searchable_dict(self) -> Mapping[str, Any] | str:
        """Text to index, as named fields or a single string."""


class RecordSource(Protocol):
    """The record store engines resolve identifiers against."""

    async def get_search_records_by_ids(self, builder: SearchBuilder, ids: Sequence[str]) -> Iterable[Any]:
        """Fetch the records whose keys are in ``ids``, in any order."""


class SearchableMixin:
    """Default ``Searchable`` behaviour for plain Python records.

    The bucket is the class name, the key is the ``id`` attribute and the
    indexed text is every public instance attribute.
    """

    def searchable_as(self) -> str:
        return type(self).__name__

    def get_search_key(self) -> Any:
        return getattr(self, "id", None)

    def to_searchable_dict(self) -> Mapping[str, Any] | str:
        return {k: v for k, v in vars(self).items() if not k.startswith("_")}
