"""
Visualization utilities.

- Field heatmaps (full snapshot or window)
- Summary panel with value histogram
"""

from detfield.viz.fields import (
    CMAP_FIELD,
    plot_field,
    plot_state,
    plot_window,
    plot_summary,
    save_figure,
)

__all__ = [
    "CMAP_FIELD",
    "plot_field",
    "plot_state",
    "plot_window",
    "plot_summary",
    "save_figure",
]
