"""Visualization utilities for simulated paths and histograms."""

import matplotlib
# Use non-interactive backend for headless environments
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from typing import Optional
from pathlib import Path
from montecarlo.accumulator import HistogramAccumulator
from montecarlo.simulation.ensemble import PathEnsemble


def _finish(fig, output_path: Optional[str], show_plot: bool) -> None:
    plt.tight_layout()

    if output_path:
        output_path_abs = Path(output_path).resolve()
        output_path_abs.parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(str(output_path_abs), dpi=300, bbox_inches='tight')

    if show_plot:
        plt.show()
    else:
        plt.close(fig)


def plot_ensemble(
    ensemble: PathEnsemble,
    output_path: Optional[str] = None,
    show_plot: bool = True,
    max_paths: int = 50,
    title: Optional[str] = None,
) -> None:
    """Plot a sample of paths with the cross-sectional range and mean.

    Parameters
    ----------
    ensemble : PathEnsemble
        Paths to plot
    output_path : str, optional
        Path to save the plot
    show_plot : bool, default=True
        Whether to display the plot
    max_paths : int, default=50
        Maximum number of individual paths drawn
    title : str, optional
        Plot title; defaults to a summary of the ensemble
    """
    time_grid = ensemble.time_grid
    values = ensemble.values

    fig, ax = plt.subplots(figsize=(12, 8), dpi=150)

    for row in values[:max_paths]:
        ax.plot(time_grid, row, alpha=0.2, color='blue', linewidth=0.5)

    # Shade the range
    ax.fill_between(
        time_grid,
        values.min(axis=0),
        values.max(axis=0),
        alpha=0.15,
        color='blue',
        label='Path Range',
    )
    ax.plot(
        time_grid,
        values.mean(axis=0),
        color='darkblue',
        linewidth=2,
        label='Mean Path',
    )

    ax.set_title(
        title or f"{ensemble.num_paths} paths, {ensemble.num_steps} samples, dt={ensemble.dt:.4g}",
        fontsize=14,
        fontweight='bold',
    )
    ax.set_xlabel('Time', fontsize=12)
    ax.set_ylabel('Value', fontsize=12)
    ax.legend(loc='best', fontsize=9)
    ax.grid(True, alpha=0.3)

    _finish(fig, output_path, show_plot)


def plot_histogram(
    accumulator: HistogramAccumulator,
    output_path: Optional[str] = None,
    show_plot: bool = True,
    title: Optional[str] = None,
) -> None:
    """Plot bucket counts of a histogram accumulator.

    Parameters
    ----------
    accumulator : HistogramAccumulator
        Histogram to plot
    output_path : str, optional
        Path to save the plot
    show_plot : bool, default=True
        Whether to display the plot
    title : str, optional
        Plot title
    """
    counts = accumulator.to_series()
    width = 10.0 ** -accumulator.precision

    fig, ax = plt.subplots(figsize=(12, 6), dpi=150)
    ax.bar(counts.index, counts.values, width=width, color='blue', alpha=0.6)
    ax.set_title(title or f"{accumulator.total} samples", fontsize=14, fontweight='bold')
    ax.set_xlabel('Value', fontsize=12)
    ax.set_ylabel('Count', fontsize=12)
    ax.grid(True, alpha=0.3)

    _finish(fig, output_path, show_plot)
