"""Search builder — The query object handed to engines by the host model layer."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SearchBuilder(BaseModel):
    """A full-text query against one searchable entity type.

    Sonic only understands the query text and the limit/offset window.
    ``wheres`` are equality constraints the engine re-applies to the
    fetched records after the query.

    Example:
        >>> builder = SearchBuilder(model=Post(), query="solar").where("author_id", 7).take(20)
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    model: Any = Field(description="Searchable record (or prototype) of the target entity type")
    query: str = Field(default="", description="Full-text query terms")
    limit: int | None = Field(default=None, ge=1, description="Maximum number of identifiers to request")
    wheres: dict[str, Any] = Field(default_factory=dict, description="Equality filters applied after fetch")

    def take(self, limit: int) -> SearchBuilder:
        """Return a copy limited to ``limit`` results."""
        return self.model_copy(update={"limit": limit})

    def where(self, attribute: str, value: Any) -> SearchBuilder:
        """Return a copy with an added equality filter."""
        return self.model_copy(update={"wheres": {**self.wheres, attribute: value}})
