"""
Run configuration with YAML load/save.

A RunConfig describes one session: which field to create and how many
steps to take. The CLI merges command-line flags over a YAML file.
"""

from __future__ import annotations
import dataclasses
from dataclasses import dataclass
from pathlib import Path

import yaml

from detfield.core.errors import InvalidConfigError
from detfield.core.state import FieldConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class RunConfig:
    """Configuration for one engine session."""

    dim: int = 64  # Grid side length
    seed: int = 1  # xorshift64 seed (unsigned 64-bit)
    alpha: float = 0.1  # Diffusion coefficient, (0, 0.25]
    steps: int = 0  # Steps to advance after initialization
    log_level: str = "WARNING"

    def __post_init__(self):
        if isinstance(self.steps, bool) or not isinstance(self.steps, int) or self.steps < 0:
            raise InvalidConfigError(f"steps must be a non-negative integer, got {self.steps!r}")
        level = str(self.log_level).upper()
        if level not in LOG_LEVELS:
            raise InvalidConfigError(f"unknown log_level: {self.log_level!r}")
        self.log_level = level

    def field_config(self) -> FieldConfig:
        """Validated engine parameters."""
        return FieldConfig(dim=self.dim, seed=self.seed, alpha=self.alpha)

    def with_overrides(self, **overrides) -> RunConfig:
        """Copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        unknown = set(changes) - {f.name for f in dataclasses.fields(self)}
        if unknown:
            raise InvalidConfigError(f"unknown config keys: {sorted(unknown)}")
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_yaml(cls, path: str | Path) -> RunConfig:
        """Load config from a YAML mapping. Missing keys keep their defaults."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise InvalidConfigError(f"{path}: expected a mapping at top level")
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidConfigError(f"{path}: unknown config keys: {sorted(unknown)}")
        return cls(**data)

    def to_yaml(self, path: str | Path) -> None:
        """Write config to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(dataclasses.asdict(self), f, default_flow_style=False, sort_keys=False)
