"""
2D visualization of engine fields.

Provides heatmaps for:
- the full field of a snapshot
- a rectangular window read through Engine.get_field_slice
- a summary panel (field + value histogram)

All plots use matplotlib. The field is drawn with y increasing downward so
that row 0 is at the top, matching row-major index order.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

if TYPE_CHECKING:
    from detfield.core.engine import Engine
    from detfield.core.state import FieldState


# Diverging colormap: values live in [-1, 1] and relax toward the mean
def _create_field_cmap():
    """Create a diverging colormap: deep blue → warm white → deep red."""
    from matplotlib.colors import LinearSegmentedColormap

    colors = [
        (0.085, 0.125, 0.400),   # Deep blue (-1)
        (0.192, 0.407, 0.700),   # Blue
        (0.600, 0.760, 0.880),   # Light blue
        (0.993, 0.978, 0.925),   # Warm white (0)
        (0.969, 0.700, 0.500),   # Light orange
        (0.800, 0.300, 0.180),   # Red-orange
        (0.400, 0.040, 0.060),   # Deep red (+1)
    ]
    return LinearSegmentedColormap.from_list("detfield", colors)


CMAP_FIELD = _create_field_cmap()


def plot_field(
    values: np.ndarray,
    title: str = "",
    cmap=None,
    vmin: float | None = -1.0,
    vmax: float | None = 1.0,
    ax: Axes | None = None,
    colorbar: bool = True,
    extent: tuple[float, float, float, float] | None = None,
    figsize: tuple[float, float] = (7, 6),
) -> tuple[Figure, Axes]:
    """
    Plot a 2D field as a heatmap.

    Args:
        values: 2D array indexed [y, x]
        title: Plot title
        cmap: Colormap (CMAP_FIELD if None)
        vmin, vmax: Color scale limits (None for auto)
        ax: Existing axes to plot on (creates new figure if None)
        colorbar: Whether to add a colorbar
        extent: imshow extent, for windows that do not start at (0, 0)
        figsize: Figure size if creating new figure

    Returns:
        (fig, ax) tuple
    """
    if cmap is None:
        cmap = CMAP_FIELD

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    im = ax.imshow(
        values,
        origin="upper",
        cmap=cmap,
        vmin=vmin,
        vmax=vmax,
        aspect="equal",
        interpolation="nearest",
        extent=extent,
    )

    if colorbar:
        plt.colorbar(im, ax=ax, fraction=0.046, pad=0.04)

    ax.set_xlabel("x")
    ax.set_ylabel("y")
    if title:
        ax.set_title(title)

    return fig, ax


def plot_state(state: "FieldState", **kwargs) -> tuple[Figure, Axes]:
    """Heatmap of a full snapshot, titled with its step and dim."""
    kwargs.setdefault("title", f"Field at step {state.step} (dim={state.dim}, α={state.alpha:g})")
    return plot_field(state.field, **kwargs)


def plot_window(
    engine: "Engine",
    x0: int,
    y0: int,
    w: int,
    h: int,
    **kwargs,
) -> tuple[Figure, Axes]:
    """
    Heatmap of the window [x0, x0+w) x [y0, y0+h).

    The window is read through the engine's public slice operation, so an
    out-of-range window raises exactly as get_field_slice does.
    """
    values = np.asarray(engine.get_field_slice(x0, y0, w, h), dtype=np.float64).reshape(h, w)
    kwargs.setdefault("title", f"Window [{x0}:{x0 + w}) x [{y0}:{y0 + h}) at step {engine.get_step()}")
    # Cell edges, y axis pointing down
    kwargs.setdefault("extent", (x0 - 0.5, x0 + w - 0.5, y0 + h - 0.5, y0 - 0.5))
    return plot_field(values, **kwargs)


def plot_summary(
    state: "FieldState",
    bins: int = 50,
    figsize: tuple[float, float] = (13, 5),
) -> Figure:
    """
    Side-by-side panel: field heatmap and value histogram.

    Returns:
        Figure
    """
    fig, (ax_field, ax_hist) = plt.subplots(1, 2, figsize=figsize)

    plot_state(state, ax=ax_field)

    values = state.field.ravel()
    ax_hist.hist(values, bins=bins, range=(-1.0, 1.0), color="#3168b3", alpha=0.8)
    ax_hist.axvline(values.mean(), color="#cc4d2e", linestyle="--", label=f"mean = {values.mean():.4g}")
    ax_hist.set_xlabel("value")
    ax_hist.set_ylabel("cells")
    ax_hist.set_title(f"Value distribution (variance = {values.var():.3e})")
    ax_hist.legend()
    ax_hist.grid(True, alpha=0.3)

    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
