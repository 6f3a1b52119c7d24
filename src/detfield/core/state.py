"""
Field state: the single mutable entity owned by an Engine.

FieldConfig holds the validated initialization parameters.
FieldState holds what the engine actually tracks:
- dim: side length of the square grid (fixed for the lifetime)
- step: completed discrete time steps since initialization
- alpha: diffusion coefficient
- field: dim x dim float64 values, indexed [y, x] (row-major when flattened)
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from detfield.core.errors import InvalidConfigError
from detfield.core.prng import generate_field, seed_to_u64

DIM_MIN = 4
DIM_MAX = 512
ALPHA_MAX = 0.25  # Stability bound of the explicit stencil


def validate_dim(dim: int) -> int:
    """Check 4 <= dim <= 512 and return dim as a plain int."""
    if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)):
        raise InvalidConfigError(f"dim must be an integer, got {type(dim).__name__}")
    dim = int(dim)
    if not DIM_MIN <= dim <= DIM_MAX:
        raise InvalidConfigError(f"dim out of range: {dim} not in [{DIM_MIN}, {DIM_MAX}]")
    return dim


def validate_alpha(alpha: float) -> float:
    """Check 0 < alpha <= 0.25 and return alpha as a plain float."""
    if isinstance(alpha, bool) or not isinstance(alpha, (int, float, np.integer, np.floating)):
        raise InvalidConfigError(f"alpha must be a number, got {type(alpha).__name__}")
    alpha = float(alpha)
    # NaN fails both comparisons
    if not (alpha > 0.0 and alpha <= ALPHA_MAX):
        raise InvalidConfigError(f"alpha out of safe range: {alpha} not in (0, {ALPHA_MAX}]")
    return alpha


@dataclass(frozen=True)
class FieldConfig:
    """Validated initialization parameters."""

    dim: int
    seed: int
    alpha: float

    def __post_init__(self):
        object.__setattr__(self, "dim", validate_dim(self.dim))
        object.__setattr__(self, "alpha", validate_alpha(self.alpha))
        object.__setattr__(self, "seed", seed_to_u64(self.seed))


@dataclass
class FieldState:
    """
    The simulation state.

    Created by FieldState.from_config, mutated only by Engine.advance,
    replaced wholesale by the next Engine.initialize.
    """

    dim: int
    alpha: float
    field: np.ndarray
    step: int = 0

    def __post_init__(self):
        if self.field.shape != (self.dim, self.dim):
            raise ValueError(
                f"field shape {self.field.shape} does not match dim {self.dim}"
            )

    @classmethod
    def from_config(cls, config: FieldConfig) -> FieldState:
        """Populate a fresh state at step 0 from the deterministic generator."""
        values = generate_field(config.dim, config.seed)
        return cls(dim=config.dim, alpha=config.alpha, field=values, step=0)

    @property
    def n_cells(self) -> int:
        """Number of grid cells (dim * dim)."""
        return self.dim * self.dim

    def flat(self) -> np.ndarray:
        """Row-major copy of the field as a 1-D array."""
        return self.field.ravel().copy()

    def copy(self) -> FieldState:
        """Independent deep copy."""
        return FieldState(
            dim=self.dim,
            alpha=self.alpha,
            field=self.field.copy(),
            step=self.step,
        )
