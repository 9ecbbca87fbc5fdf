"""
Visualization utilities for LMSim.

Draws the two sum-of-squares views of a simulated regression and the
per-sample density curves of an expression matrix. Functions accept an
optional matplotlib ``Axes`` and return what they drew on, so they can be
composed into larger figures; nothing here feeds back into the simulator.
"""

from typing import Optional

import numpy as np

__all__ = [
    "plot_residuals",
    "plot_explained",
    "plot_sum_of_squares",
    "plot_densities",
    "plot_preprocessing",
]

_POINT_COLOR = "#333333"
_LINE_COLOR = "#1f77b4"
_RESIDUAL_COLOR = "#d62728"
_EXPLAINED_COLOR = "#2ca02c"
_MEAN_COLOR = "#7f7f7f"


def _pyplot():
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib required for plotting: pip install matplotlib") from None
    return plt


def _get_ax(ax):
    if ax is None:
        _, ax = _pyplot().subplots(figsize=(6, 5))
    return ax


def _draw_fitted_line(ax, result):
    x_line = np.array([result.x.min(), result.x.max()])
    ax.plot(
        x_line,
        result.intercept + result.slope * x_line,
        color=_LINE_COLOR,
        linewidth=2,
        label=f"y = {result.intercept:.2f} + {result.slope:.2f}x",
    )


def _annotate(ax, text):
    ax.text(
        0.03,
        0.97,
        text,
        transform=ax.transAxes,
        va="top",
        ha="left",
        fontsize=11,
        bbox={"boxstyle": "round,pad=0.3", "facecolor": "white", "alpha": 0.8},
    )


def plot_residuals(result, ax=None):
    """Scatter of ``(x, y)`` with the fitted line and residual segments.

    Each observation is joined vertically to the fitted line; the plot is
    annotated with the residual sum of squares.

    Args:
        result: ``SimulationResult`` to draw.
        ax: Axes to draw on; a new figure is created when omitted.

    Returns:
        The matplotlib ``Axes``.
    """
    ax = _get_ax(ax)
    ax.vlines(result.x, result.y_fitted, result.y, colors=_RESIDUAL_COLOR, linewidth=1, label="residual")
    ax.scatter(result.x, result.y, color=_POINT_COLOR, s=20, zorder=3)
    _draw_fitted_line(ax, result)
    _annotate(ax, f"Residual SS = {result.ss_residual:.1f}")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    return ax


def plot_explained(result, ax=None):
    """Fitted line, mean line and the explained deviation at every ``x``.

    Args:
        result: ``SimulationResult`` to draw.
        ax: Axes to draw on; a new figure is created when omitted.

    Returns:
        The matplotlib ``Axes``.
    """
    ax = _get_ax(ax)
    ax.vlines(result.x, result.y_mean, result.y_fitted, colors=_EXPLAINED_COLOR, linewidth=1, label="explained")
    ax.axhline(result.y_mean, color=_MEAN_COLOR, linestyle="--", linewidth=1.5, label=f"mean = {result.y_mean:.2f}")
    _draw_fitted_line(ax, result)
    _annotate(ax, f"Explained SS = {result.ss_explained:.1f}")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    return ax


def plot_sum_of_squares(result, show: bool = False):
    """Residual and explained views side by side, on shared axes.

    Args:
        result: ``SimulationResult`` to draw.
        show: Call ``plt.show()`` after drawing.

    Returns:
        The matplotlib ``Figure``.
    """
    plt = _pyplot()
    fig, (ax_res, ax_exp) = plt.subplots(1, 2, figsize=(12, 5), sharex=True, sharey=True)
    plot_residuals(result, ax=ax_res)
    plot_explained(result, ax=ax_exp)
    fig.suptitle(
        f"n = {result.sample_size}, effect = {result.effect:g}, noise = {result.noise:g}, F = {result.f_statistic:.2f}",
        fontsize=12,
    )
    fig.tight_layout()
    if show:
        plt.show()
    return fig


def plot_densities(matrix, threshold: Optional[float] = None, ax=None, title: Optional[str] = None):
    """One density curve per sample of an expression matrix.

    Args:
        matrix: Samples x genes matrix (DataFrame or 2-D array).
        threshold: Draw a vertical line at this expression level.
        ax: Axes to draw on; a new figure is created when omitted.
        title: Optional axes title.

    Returns:
        The matplotlib ``Axes``.
    """
    from ..stats.expression import expression_densities

    densities = expression_densities(matrix)
    ax = _get_ax(ax)
    colors = _pyplot().cm.viridis(np.linspace(0, 1, densities.shape[1]))
    grid = densities.index.to_numpy()
    for color, sample in zip(colors, densities.columns):
        ax.plot(grid, densities[sample].to_numpy(), color=color, linewidth=1)

    if threshold is not None:
        ax.axvline(threshold, color="black", linestyle="--", linewidth=1)

    ax.set_xlabel("Intensity")
    ax.set_ylabel("Density")
    if title:
        ax.set_title(title)
    return ax


def plot_preprocessing(result, show: bool = False):
    """Densities of every preprocessing stage, one panel per stage.

    The threshold line is drawn on the normalized panel, where the filter
    decision is made.

    Args:
        result: ``PreprocessingResult`` to draw.
        show: Call ``plt.show()`` after drawing.

    Returns:
        The matplotlib ``Figure``.
    """
    plt = _pyplot()
    stages = result.stages
    fig, axes = plt.subplots(1, len(stages), figsize=(4 * len(stages), 4))
    for ax, (name, matrix) in zip(axes, stages.items()):
        if matrix.shape[1] < 2:
            ax.set_title(f"{name} (too few genes)")
            continue
        threshold = result.threshold if name == "normalized" else None
        plot_densities(matrix, threshold=threshold, ax=ax, title=name)
    fig.tight_layout()
    if show:
        plt.show()
    return fig
