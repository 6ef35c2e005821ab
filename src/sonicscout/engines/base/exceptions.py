"""Engine-specific exceptions.

Errors coming from the Sonic client or from a record source are not
wrapped in these; they reach the caller unchanged.
"""


class EngineError(Exception):
    """Base exception for engine errors."""


class ConnectionError(EngineError):
    """Raised when the engine cannot open its channels to Sonic."""


class ConfigurationError(EngineError):
    """Raised when engine or model configuration is invalid."""
