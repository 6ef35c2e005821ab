"""SonicScout — Sonic search daemon engine for model-search integrations."""

from sonicscout.core.reconciler import reconcile
from sonicscout.engines.sonic.engine import SonicEngine
from sonicscout.models.builder import SearchBuilder

__version__ = "0.1.0"

__all__ = ["SearchBuilder", "SonicEngine", "__version__", "reconcile"]
