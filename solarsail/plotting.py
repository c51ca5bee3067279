"""Visualization module for solar sail trajectories.

Provides plotting functions for:
- Heliocentric trajectory view with planetary reference orbits
- State component histories (r, theta, v_r, v_t) vs time

All plots use matplotlib with a consistent style. The propagator works in
polar coordinates; projection to Cartesian happens only here.
"""

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Circle
from numpy.typing import NDArray

from solarsail._typecheck import typecheck
from solarsail.dynamics.state import STATE_COMPONENTS
from solarsail.simulation.propagator import Trajectory

# =============================================================================
# Plot Style Configuration
# =============================================================================

COLORS = {
    "sun": "#F9FFD9",
    "sun_edge": "#F18F01",
    "orbit": "#CCCCCC",
    "grid": "#CCCCCC",
    "text": "#333333",
}

# One colour per control segment, cycled
SEGMENT_COLORS = (
    "#750787", "#004DFF", "#008026", "#FFED00", "#FF8C00",
    "#E40303", "#000000", "#FFAFC8", "#74D7EE", "#613915",  # black stands in for white on light axes
)

# Semi-major axes of the planets (and Ceres, Pluto) [AU]
PLANET_ORBITS = {
    "Mercury": 0.387,
    "Venus": 0.723,
    "Earth": 1.0,
    "Mars": 1.5,
    "Ceres": 2.77,
    "Jupiter": 5.2,
    "Saturn": 9.58,
    "Uranus": 19.22,
    "Neptune": 30.07,
    "Pluto": 39.48,
}

# Margin around the farthest trajectory point
VIEW_MARGIN = 1.1


def _setup_style() -> None:
    """Configure matplotlib style for consistent appearance."""
    plt.rcParams.update({
        "font.family": "sans-serif",
        "font.sans-serif": ["Helvetica", "Arial", "DejaVu Sans"],
        "font.size": 11,
        "axes.titlesize": 14,
        "axes.labelsize": 12,
        "axes.linewidth": 1.2,
        "axes.edgecolor": COLORS["text"],
        "axes.labelcolor": COLORS["text"],
        "legend.fontsize": 10,
        "grid.alpha": 0.5,
    })


def segment_color(index: int) -> str:
    """Colour used for the given control segment."""
    return SEGMENT_COLORS[index % len(SEGMENT_COLORS)]


@typecheck
def polar_to_cartesian(states: NDArray[np.floating]) -> NDArray[np.float64]:
    """Project polar states onto the orbital plane.

    Args:
        states: Array of shape (N, >=2) whose first two columns are (r, theta)

    Returns:
        Array of shape (N, 2) with (x, y) positions
    """
    states = np.atleast_2d(states)
    r = states[:, 0]
    theta = states[:, 1]
    return np.column_stack([r * np.cos(theta), r * np.sin(theta)])


# =============================================================================
# Trajectory Plots
# =============================================================================


@typecheck
def plot_trajectory(
    trajectory: Trajectory,
    show_planets: bool = True,
    figsize: tuple[float, float] = (8, 8),
    title: str | None = None,
) -> Figure:
    """Plot the sail path in the orbital plane.

    Each control segment is drawn in its own colour. Planetary orbits inside
    the view are drawn as reference circles.

    Args:
        trajectory: Propagated trajectory
        show_planets: Draw planetary reference orbits
        figsize: Figure size (width, height)
        title: Optional plot title

    Returns:
        matplotlib Figure
    """
    _setup_style()

    fig, ax = plt.subplots(figsize=figsize)
    extent = VIEW_MARGIN * trajectory.max_radius

    if show_planets:
        for name, radius in PLANET_ORBITS.items():
            if radius > extent:
                continue
            ax.add_patch(Circle(
                (0.0, 0.0), radius, fill=False,
                edgecolor=COLORS["orbit"], linewidth=0.8, linestyle="--",
            ))
            ax.annotate(name, xy=(radius, 0.0), fontsize=8, color=COLORS["orbit"])

    ax.scatter(
        [0.0], [0.0], s=120, c=COLORS["sun"],
        edgecolors=COLORS["sun_edge"], zorder=3, label="Sun",
    )

    for i, (seg, control) in enumerate(zip(trajectory.segments, trajectory.controls)):
        xy = polar_to_cartesian(seg.states)
        ax.plot(
            xy[:, 0], xy[:, 1], color=segment_color(i), linewidth=2,
            label=f"Segment {i + 1}: {control.angle_deg:+.1f}°",
        )

    start = polar_to_cartesian(trajectory.initial_state)
    ax.scatter(start[:, 0], start[:, 1], marker="o", c=COLORS["text"], s=30, zorder=4)

    ax.set_xlim(-extent, extent)
    ax.set_ylim(-extent, extent)
    ax.set_aspect("equal")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title(title or "Solar Sail Trajectory")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper right")

    fig.tight_layout()
    return fig


@typecheck
def plot_state_history(
    trajectory: Trajectory,
    figsize: tuple[float, float] = (12, 8),
    title: str | None = None,
) -> Figure:
    """Plot each state component against time.

    Segment boundaries are marked with vertical lines.
    """
    _setup_style()

    fig, axes = plt.subplots(2, 2, figsize=figsize, sharex=True)
    labels = {
        "r": "r",
        "theta": "θ [rad]",
        "v_r": "v_r",
        "v_t": "v_t",
    }

    for k, (ax, name) in enumerate(zip(axes.flat, STATE_COMPONENTS)):
        for i, seg in enumerate(trajectory.segments):
            ax.plot(seg.times, seg.states[:, k], color=segment_color(i), linewidth=1.5)
            ax.axvline(seg.times[0], color=COLORS["grid"], linewidth=0.8, linestyle=":")
        ax.set_ylabel(labels[name])
        ax.grid(True, alpha=0.3)

    for ax in axes[-1]:
        ax.set_xlabel("Time")

    fig.suptitle(title or "State History")
    fig.tight_layout()
    return fig
