"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest
from asonic import Client

from sonicscout.config.settings import Settings
from sonicscout.engines.sonic.engine import SonicEngine
from sonicscout.models.record import SearchableMixin


class SearchableModel(SearchableMixin):
    """Minimal searchable record with a key and one extra attribute."""

    def __init__(self, id: Any, **attributes: Any) -> None:
        self.id = id
        for name, value in attributes.items():
            setattr(self, name, value)

    def to_searchable_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": "searchable model"}

    def __repr__(self) -> str:
        return f"SearchableModel(id={self.id!r})"


class SearchableModelWithLocale(SearchableModel):
    def searchable_as(self) -> str:
        return "SearchableModel"

    def get_sonic_locale(self) -> str:
        return "none"


class RecordSource:
    """In-memory record store returning rows in its own order."""

    def __init__(self, records: list[Any]) -> None:
        self.records = records
        self.calls: list[list[str]] = []

    async def get_search_records_by_ids(self, builder: Any, ids: list[str]) -> list[Any]:
        self.calls.append(list(ids))
        return list(self.records)


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        sonic={"host": "sonic.test", "password": "test-password"},
    )


@pytest.fixture
def ingest() -> AsyncMock:
    return AsyncMock(spec=Client)


@pytest.fixture
def search() -> AsyncMock:
    channel = AsyncMock(spec=Client)
    channel.query.return_value = []
    return channel


@pytest.fixture
def control() -> AsyncMock:
    return AsyncMock(spec=Client)


@pytest.fixture
def engine(ingest: AsyncMock, search: AsyncMock, control: AsyncMock) -> SonicEngine:
    return SonicEngine(ingest, search, control)
