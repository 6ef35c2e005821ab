"""Sonic engine."""

from sonicscout.engines.sonic.engine import SonicEngine

__all__ = ["SonicEngine"]
