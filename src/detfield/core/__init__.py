"""
Core engine primitives.

This layer is the whole state-evolution engine:
- Deterministic generator (xorshift64 → values in [-1, 1])
- Field state and its validated configuration
- Periodic 4-neighbor diffusion stencil with double buffering
- Canonical SHA-256 hash and window reads

Nothing here knows about plotting, statistics or the command line.
"""

from detfield.core.errors import (
    EngineError,
    InvalidConfigError,
    UninitializedError,
    InvalidWindowError,
    UnknownCommandError,
)
from detfield.core.prng import xorshift64, seed_to_u64, xorshift_stream, to_unit_interval, generate_field
from detfield.core.state import FieldConfig, FieldState, DIM_MIN, DIM_MAX, ALPHA_MAX
from detfield.core.stencil import wrap, laplacian, diffusion_step, evolve, reference_step
from detfield.core.reader import canonical_bytes, state_digest, check_window, extract_window, field_slice
from detfield.core.engine import Engine

__all__ = [
    "EngineError",
    "InvalidConfigError",
    "UninitializedError",
    "InvalidWindowError",
    "UnknownCommandError",
    "xorshift64",
    "seed_to_u64",
    "xorshift_stream",
    "to_unit_interval",
    "generate_field",
    "FieldConfig",
    "FieldState",
    "DIM_MIN",
    "DIM_MAX",
    "ALPHA_MAX",
    "wrap",
    "laplacian",
    "diffusion_step",
    "evolve",
    "reference_step",
    "canonical_bytes",
    "state_digest",
    "check_window",
    "extract_window",
    "field_slice",
    "Engine",
]
