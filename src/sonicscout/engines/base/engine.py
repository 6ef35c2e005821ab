"""Base search engine — Abstract interface behind the model-search contract.

Every search backend must implement this interface to serve searchable
records. The engine is responsible for:
  1. Keeping the index in sync with records (update / delete / flush)
  2. Executing builder queries and returning raw results
  3. Mapping raw results back onto records
  4. Reporting health status
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Any

from sonicscout.models.builder import SearchBuilder
from sonicscout.models.health import EngineHealth


class SearchEngine(ABC):
    """Abstract base class for search engines.

    All engines must implement:
      - update() / delete(): Sync records into or out of the index
      - search() / paginate(): Execute a builder and return raw results
      - map_ids() / map() / get_total_count(): Interpret raw results
      - flush(): Drop every indexed record of an entity type
      - health_check() / shutdown(): Lifecycle

    Engines receive already-connected backend handles; they never look up
    configuration or connections on their own.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique engine name (e.g., 'sonic')."""

    @abstractmethod
    async def update(self, records: Sequence[Any]) -> None:
        """Add or replace the given records in the index."""

    @abstractmethod
    async def delete(self, records: Sequence[Any]) -> None:
        """Remove the given records from the index."""

    @abstractmethod
    async def search(self, builder: SearchBuilder) -> Any:
        """Execute the builder and return raw backend results."""

    @abstractmethod
    async def paginate(self, builder: SearchBuilder, per_page: int, page: int) -> Any:
        """Execute the builder for one page of results.

        Args:
            builder: The query.
            per_page: Page size.
            page: 1-based page number.
        """

    @abstractmethod
    def map_ids(self, results: Any) -> list[Any]:
        """Pluck the record keys out of raw results."""

    @abstractmethod
    async def map(self, builder: SearchBuilder, results: Any, model: Any) -> list[Any]:
        """Resolve raw results to records of ``model``'s type."""

    @abstractmethod
    def get_total_count(self, results: Any) -> int:
        """Total hit count of raw results."""

    @abstractmethod
    async def flush(self, model: Any) -> None:
        """Remove every indexed record of ``model``'s entity type."""

    @abstractmethod
    async def health_check(self) -> EngineHealth:
        """Check the health of the backend."""

    @abstractmethod
    async def shutdown(self) -> None:
        """Release backend connections."""

    async def get(self, builder: SearchBuilder) -> list[Any]:
        """Search and map results to records in one step.

        Args:
            builder: The query. ``builder.model`` supplies the record source.

        Returns:
            Matching records, best match first.
        """
        results = await self.search(builder)
        return await self.map(builder, results, builder.model)

    async def keys(self, builder: SearchBuilder) -> list[Any]:
        """Search and return only the matching record keys."""
        return self.map_ids(await self.search(builder))

    async def __aenter__(self) -> SearchEngine:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.shutdown()


def searchable_text(data: Any) -> str:
    """Flatten searchable data into the text handed to the index."""
    if isinstance(data, str):
        return data
    values: Iterable[Any] = data.values() if hasattr(data, "values") else data
    return " ".join(str(v) for v in values if v is not None and v != "")
