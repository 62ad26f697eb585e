# src/config/settings.py — v2
"""Typed configuration loaded from the environment / .env via pydantic-settings.

Holds the default options of every algorithm entry point and the logging
setup. Explicit options passed to an entry point always win over these.
Environment variables use the FLEXALGO_ prefix (FLEXALGO_DAMPING=0.9).
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="FLEXALGO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Adjacency building ===
    max_edges_per_node: int | None = None
    weight_attribute: str = "weight"
    default_weight: float = 1.0
    min_weight: float = 0.0

    # === Community detection (Louvain / Leiden) ===
    resolution: float = 1.0
    max_passes: int = 10
    max_levels: int = 10
    min_gain: float = 1e-12

    # === PageRank ===
    damping: float = 0.85
    max_iterations: int = 50
    tolerance: float = 1e-8

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("damping")
    @classmethod
    def validate_damping(cls, v: float) -> float:
        if not math.isfinite(v) or not 0.0 <= v <= 1.0:
            raise ValueError("damping must be within [0, 1]")
        return v

    @field_validator("max_passes", "max_levels", "max_iterations")
    @classmethod
    def validate_positive(cls, v: int, info) -> int:  # noqa: N805
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @field_validator("tolerance", "min_gain")
    @classmethod
    def validate_non_negative(cls, v: float, info) -> float:  # noqa: N805
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v

    @field_validator("max_edges_per_node")
    @classmethod
    def validate_edge_cap(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError("max_edges_per_node must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.min_weight > self.default_weight:
            errors.append("MIN_WEIGHT must be <= DEFAULT_WEIGHT")

        if not self.weight_attribute.strip():
            errors.append("WEIGHT_ATTRIBUTE must not be empty")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    def option_defaults(self) -> dict[str, Any]:
        """Algorithm option defaults, keyed by option field name."""
        return {
            "max_edges_per_node": self.max_edges_per_node,
            "weight_attribute": self.weight_attribute,
            "default_weight": self.default_weight,
            "min_weight": self.min_weight,
            "resolution": self.resolution,
            "max_passes": self.max_passes,
            "max_levels": self.max_levels,
            "min_gain": self.min_gain,
            "damping": self.damping,
            "max_iterations": self.max_iterations,
            "tolerance": self.tolerance,
        }


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment / .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-call config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
