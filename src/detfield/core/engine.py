"""
Engine: the owned handle that exposes the command verbs.

    engine = Engine()
    engine.initialize(dim=64, seed=1, alpha=0.1)
    engine.advance(100)
    engine.get_hash()

There is no module-level instance. Callers create an Engine and pass it
around. Each call holds the engine lock for its full duration, so
concurrent callers are serialized and readers never see a half-committed
step.

Metadata reads (get_step, get_dim) return 0 before initialization.
Data reads (get_hash, get_field_slice, snapshot) raise UninitializedError.
"""

from __future__ import annotations
import logging
import threading
from typing import TYPE_CHECKING

import numpy as np

from detfield.core.errors import UninitializedError
from detfield.core.reader import field_slice, state_digest
from detfield.core.state import FieldConfig, FieldState
from detfield.core.stencil import evolve

if TYPE_CHECKING:
    from detfield.config import RunConfig

logger = logging.getLogger(__name__)

MAX_U32 = 0xFFFF_FFFF


class Engine:
    """Single-owner deterministic diffusion engine."""

    def __init__(self):
        self._state: FieldState | None = None
        self._scratch: np.ndarray | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: "RunConfig") -> Engine:
        """Create an engine initialized from a RunConfig and advanced by config.steps."""
        engine = cls()
        fc = config.field_config()
        engine.initialize(fc.dim, fc.seed, fc.alpha)
        if config.steps:
            engine.advance(config.steps)
        return engine

    @property
    def is_initialized(self) -> bool:
        return self._state is not None

    # ═══════════════════════════════════════════════════════════════
    # WRITERS
    # ═══════════════════════════════════════════════════════════════

    def initialize(self, dim: int, seed: int, alpha: float) -> None:
        """
        Create a fresh field, replacing any previous state.

        Validation happens first. On failure the previous state is kept.

        Args:
            dim: Grid side length, 4 <= dim <= 512
            seed: Unsigned 64-bit generator seed, used verbatim
            alpha: Diffusion coefficient, 0 < alpha <= 0.25

        Raises:
            InvalidConfigError: if any parameter is out of range
        """
        config = FieldConfig(dim=dim, seed=seed, alpha=alpha)
        new_state = FieldState.from_config(config)
        with self._lock:
            self._state = new_state
            self._scratch = None
        logger.info(
            "initialized field dim=%d seed=%d alpha=%r", config.dim, config.seed, config.alpha
        )

    def advance(self, n: int) -> None:
        """
        Perform n diffusion steps.

        The new field is committed only after all n steps complete, then
        step increases by exactly n.

        Raises:
            UninitializedError: if initialize has not succeeded yet
            ValueError: if n is not an integer in [0, 2**32)
        """
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise ValueError(f"step count must be an integer, got {type(n).__name__}")
        n = int(n)
        if not 0 <= n <= MAX_U32:
            raise ValueError(f"step count out of range: {n}")

        with self._lock:
            state = self._require_state()
            if n == 0:
                return
            scratch = self._scratch
            new_field = evolve(state.field, state.alpha, n, scratch=scratch)
            # The buffer evolve did not return is free for the next call
            self._scratch = state.field
            state.field = new_field
            state.step += n
            step = state.step

        logger.debug("advanced %d steps, now at step %d", n, step)

    # ═══════════════════════════════════════════════════════════════
    # READERS
    # ═══════════════════════════════════════════════════════════════

    def get_step(self) -> int:
        """Completed step count, or 0 if uninitialized."""
        with self._lock:
            return self._state.step if self._state is not None else 0

    def get_dim(self) -> int:
        """Grid dimension, or 0 if uninitialized."""
        with self._lock:
            return self._state.dim if self._state is not None else 0

    def get_hash(self) -> bytes:
        """Raw 32-byte SHA-256 digest of the full state."""
        with self._lock:
            return state_digest(self._require_state())

    def get_hash_hex(self) -> str:
        """Lowercase hex encoding of get_hash()."""
        return self.get_hash().hex()

    def get_field_slice(self, x0: int, y0: int, w: int, h: int) -> list[float]:
        """
        Values of the window [x0, x0+w) x [y0, y0+h) in row-major order.

        Raises:
            UninitializedError: if initialize has not succeeded yet
            InvalidWindowError: if the window does not fit in the grid
        """
        with self._lock:
            return field_slice(self._require_state(), x0, y0, w, h)

    def snapshot(self) -> FieldState:
        """Deep copy of the current state."""
        with self._lock:
            return self._require_state().copy()

    def _require_state(self) -> FieldState:
        if self._state is None:
            raise UninitializedError()
        return self._state
