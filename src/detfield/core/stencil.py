"""
Stencil evolver: explicit diffusion with a periodic 4-neighbor Laplacian.

Per cell and per step:
    laplacian = ((left + right) + up) + down - 4 * center
    next      = center + alpha * laplacian

Neighbors wrap around with floored modulo (toroidal grid, no border cases).
The evaluation order above is part of the bitwise contract: the vectorized
path and the scalar reference produce identical doubles.

Each step reads only the previous snapshot. The result goes into a second
buffer and the buffers are swapped after the full pass, so old and new
values never mix within a step.
"""

from __future__ import annotations

import numpy as np


def wrap(dim: int, v: int) -> int:
    """Floored modulo: always in [0, dim)."""
    return v % dim


def laplacian(field: np.ndarray) -> np.ndarray:
    """
    Periodic 4-neighbor Laplacian of a [y, x] field.

    np.roll(f, 1, axis=1)[y, x] == f[y, x-1] (left), and so on.
    """
    lap = np.roll(field, 1, axis=1) + np.roll(field, -1, axis=1)  # left + right
    lap += np.roll(field, 1, axis=0)   # up
    lap += np.roll(field, -1, axis=0)  # down
    lap -= 4.0 * field
    return lap


def diffusion_step(src: np.ndarray, dst: np.ndarray, alpha: float) -> np.ndarray:
    """
    Write one full diffusion step of src into dst.

    src is only read. dst must be a separate buffer of the same shape.

    Returns:
        dst
    """
    if dst is src or np.shares_memory(src, dst):
        raise ValueError("dst must not alias src")
    np.add(np.roll(src, 1, axis=1), np.roll(src, -1, axis=1), out=dst)
    dst += np.roll(src, 1, axis=0)
    dst += np.roll(src, -1, axis=0)
    dst -= 4.0 * src
    # alpha * lap, then center + that (IEEE add/mul are commutative)
    dst *= alpha
    dst += src
    return dst


def evolve(
    field: np.ndarray,
    alpha: float,
    n: int,
    scratch: np.ndarray | None = None,
) -> np.ndarray:
    """
    Advance a field by n steps with two buffers swapped by reference.

    The input array is never modified.

    Args:
        field: Current values, shape (dim, dim)
        alpha: Diffusion coefficient
        n: Number of steps (0 returns a copy)
        scratch: Optional reusable buffer of the same shape

    Returns:
        A new array holding the state after n steps
    """
    current = field.copy()
    if n == 0:
        return current
    if scratch is None or scratch.shape != field.shape or np.shares_memory(scratch, field):
        scratch = np.empty_like(field)
    nxt = scratch
    for _ in range(n):
        diffusion_step(current, nxt, alpha)
        current, nxt = nxt, current
    return current


def reference_step(field: np.ndarray, alpha: float) -> np.ndarray:
    """
    One diffusion step as a plain per-cell loop.

    Slow. This is the executable definition of the update rule that the
    vectorized path is checked against.
    """
    dim = field.shape[0]
    src = field.tolist()
    out = [[0.0] * dim for _ in range(dim)]
    for y in range(dim):
        for x in range(dim):
            c = src[y][x]
            left = src[y][wrap(dim, x - 1)]
            right = src[y][wrap(dim, x + 1)]
            up = src[wrap(dim, y - 1)][x]
            down = src[wrap(dim, y + 1)][x]
            lap = (left + right + up + down) - 4.0 * c
            out[y][x] = c + alpha * lap
    return np.array(out, dtype=np.float64)
