"""
Analysis layer: derived quantities for inspection and validation.

IMPORTANT: This is NOT used by the engine. One-way derivation only.

- summarize: scalar statistics of a snapshot (mean, variance, total, ...)
- variance_history: variance after each step
- predict_field: spectral prediction of n diffusion steps (scipy.fft)
"""

from detfield.analysis.diagnostics import FieldSummary, summarize, variance_history
from detfield.analysis.spectral import mode_decay_factors, predict_field, slowest_decay_rate

__all__ = [
    "FieldSummary",
    "summarize",
    "variance_history",
    "mode_decay_factors",
    "predict_field",
    "slowest_decay_rate",
]
