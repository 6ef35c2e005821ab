"""Base engine interface — Abstract contract for model-search engines."""

from sonicscout.engines.base.engine import SearchEngine

__all__ = ["SearchEngine"]
