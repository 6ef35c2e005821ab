"""Model-search abstraction types shared by engines."""

from sonicscout.models.builder import SearchBuilder
from sonicscout.models.health import EngineHealth
from sonicscout.models.record import RecordSource, Searchable, SearchableMixin

__all__ = ["EngineHealth", "RecordSource", "SearchBuilder", "Searchable", "SearchableMixin"]
