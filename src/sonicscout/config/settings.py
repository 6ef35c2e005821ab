"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (SONICSCOUT_ prefix)
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class SonicSettings(BaseModel):
    """Connection settings for the Sonic daemon."""

    host: str = Field(default="127.0.0.1", description="Sonic host")
    port: int = Field(default=1491, ge=1, le=65535, description="Sonic channel port")
    password: str = Field(default="SecretPassword", description="Sonic channel auth password")
    max_connections: int = Field(default=100, ge=1, description="Connection pool size per channel")


class IndexSettings(BaseModel):
    """Indexing behaviour."""

    consolidate_on_update: bool = Field(
        default=True,
        description="Trigger a CONSOLIDATE on the control channel after each update batch",
    )


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")

    @field_validator("log_format")
    @classmethod
    def _check_format(cls, v: str) -> str:
        if v not in ("json", "console"):
            raise ValueError(f"log_format must be 'json' or 'console', got {v!r}")
        return v


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the SONICSCOUT_ prefix.
    Nested settings use double underscores: SONICSCOUT_SONIC__PORT=1491

    Example:
        SONICSCOUT_SONIC__HOST=sonic.internal
        SONICSCOUT_SONIC__PASSWORD=...
        SONICSCOUT_INDEX__CONSOLIDATE_ON_UPDATE=false
    """

    model_config = {
        "env_prefix": "SONICSCOUT_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    sonic: SonicSettings = Field(default_factory=SonicSettings)
    index: IndexSettings = Field(default_factory=IndexSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are used as defaults; environment variables
        still take precedence.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
