"""
Deterministic generator: xorshift64 on an unsigned 64-bit word.

The stream is a pure function of the seed. No clock, no OS entropy and no
deployment identity is ever mixed in, so the same seed produces the same
field everywhere.

Field population consumes the stream in row-major order (left to right,
top to bottom). That order is part of the reproducibility contract.
"""

from __future__ import annotations
from typing import Iterator
import logging

import numpy as np

from detfield.core.errors import InvalidConfigError

logger = logging.getLogger(__name__)

MASK_U64 = 0xFFFF_FFFF_FFFF_FFFF
MAX_U64 = MASK_U64

# float(MAX_U64) rounds to 2**64; the divisor is the rounded value
_MAX_U64_F = float(MAX_U64)


def xorshift64(x: int) -> int:
    """One xorshift step: <<13, >>7, <<17, each XORed in and truncated to 64 bits."""
    x ^= (x << 13) & MASK_U64
    x ^= x >> 7
    x ^= (x << 17) & MASK_U64
    return x


def seed_to_u64(seed: int) -> int:
    """
    Validate a seed and return it as the initial generator word.

    The seed is used verbatim. Mixing in anything else would break
    cross-deployment reproducibility.
    """
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise InvalidConfigError(f"seed must be an integer, got {type(seed).__name__}")
    seed = int(seed)
    if not 0 <= seed <= MAX_U64:
        raise InvalidConfigError(f"seed {seed} does not fit in an unsigned 64-bit word")
    if seed == 0:
        logger.warning("seed 0 is a fixed point of xorshift64; the field will be constant -1.0")
    return seed


def xorshift_stream(seed: int, n: int) -> Iterator[int]:
    """Yield the next n generator words after seed (the seed itself is not emitted)."""
    s = seed
    for _ in range(n):
        s = xorshift64(s)
        yield s


def to_unit_interval(word: int) -> float:
    """Map a 64-bit word to a double in [-1, 1]."""
    u = float(word) / _MAX_U64_F
    return u * 2.0 - 1.0


def generate_field(dim: int, seed: int) -> np.ndarray:
    """
    Populate a dim x dim field from the generator.

    Args:
        dim: Side length of the square grid
        seed: Initial generator word (already validated)

    Returns:
        float64 array of shape (dim, dim), indexed [y, x]
    """
    n = dim * dim
    words = np.fromiter(
        (float(w) for w in xorshift_stream(seed, n)),
        dtype=np.float64,
        count=n,
    )
    # Elementwise IEEE ops in the same order as to_unit_interval
    values = (words / _MAX_U64_F) * 2.0 - 1.0
    return values.reshape(dim, dim)
