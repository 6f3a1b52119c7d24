"""
State reader: read-only projections of a FieldState.

- canonical_bytes / state_digest: the SHA-256 fingerprint of the full state
- extract_window: a rectangular sub-window, never wrapped or clamped

Hash preimage, in fixed order:
    dim   u32 little-endian
    step  u64 little-endian
    alpha f64 little-endian (raw IEEE-754 bits)
    every field value, row-major, f64 little-endian
"""

from __future__ import annotations
import hashlib
import struct
from typing import TYPE_CHECKING

import numpy as np

from detfield.core.errors import InvalidWindowError

if TYPE_CHECKING:
    from detfield.core.state import FieldState

_HEADER = struct.Struct("<IQd")

DIGEST_SIZE = 32


def canonical_bytes(state: "FieldState") -> bytes:
    """Exact byte sequence fed to SHA-256 for this state."""
    header = _HEADER.pack(state.dim, state.step, state.alpha)
    body = np.ascontiguousarray(state.field, dtype="<f8").tobytes(order="C")
    return header + body


def state_digest(state: "FieldState") -> bytes:
    """Raw 32-byte SHA-256 digest of the canonical state bytes."""
    return hashlib.sha256(canonical_bytes(state)).digest()


def check_window(dim: int, x0: int, y0: int, w: int, h: int) -> None:
    """
    Raise InvalidWindowError unless [x0, x0+w) x [y0, y0+h) fits in the grid.
    """
    for name, v in (("x0", x0), ("y0", y0), ("w", w), ("h", h)):
        if isinstance(v, bool) or not isinstance(v, (int, np.integer)):
            raise InvalidWindowError(f"{name} must be an integer, got {type(v).__name__}")
        if v < 0:
            raise InvalidWindowError(f"{name} must be non-negative, got {v}")
    # Python ints: x0 + w must not wrap
    x0, y0, w, h = int(x0), int(y0), int(w), int(h)
    if not (x0 < dim and y0 < dim):
        raise InvalidWindowError(f"start out of range: ({x0}, {y0}) with dim {dim}")
    if not (w >= 1 and h >= 1):
        raise InvalidWindowError(f"invalid size: {w}x{h}")
    if not (x0 + w <= dim and y0 + h <= dim):
        raise InvalidWindowError(
            f"slice out of range: [{x0}, {x0 + w}) x [{y0}, {y0 + h}) with dim {dim}"
        )


def extract_window(state: "FieldState", x0: int, y0: int, w: int, h: int) -> np.ndarray:
    """
    Copy of the window [x0, x0+w) x [y0, y0+h).

    Returns:
        float64 array of shape (h, w), indexed [y, x]
    """
    check_window(state.dim, x0, y0, w, h)
    x0, y0, w, h = int(x0), int(y0), int(w), int(h)
    return state.field[y0:y0 + h, x0:x0 + w].copy()


def field_slice(state: "FieldState", x0: int, y0: int, w: int, h: int) -> list[float]:
    """Window values as a flat row-major list of Python floats."""
    return extract_window(state, x0, y0, w, h).ravel().tolist()
