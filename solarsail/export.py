"""Data export utilities for sail trajectories."""

import json
from pathlib import Path

import numpy as np

from solarsail.dynamics.state import STATE_COMPONENTS
from solarsail.simulation.propagator import Trajectory


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder for NumPy arrays."""
    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


def trajectory_to_dict(trajectory: Trajectory, metadata: dict | None = None) -> dict:
    """Structure a trajectory as plain data, one entry per control segment."""
    return {
        "metadata": {
            "initial_time": trajectory.initial_time,
            "initial_state": trajectory.initial_state,
            "state_components": list(STATE_COMPONENTS),
            **(metadata or {}),
        },
        "segments": [
            {
                "index": i,
                "angle": control.angle,
                "duration": control.duration,
                "times": seg.times,
                "states": seg.states,
            }
            for i, (seg, control) in enumerate(zip(trajectory.segments, trajectory.controls))
        ],
    }


def export_trajectory_to_json(
    trajectory: Trajectory,
    filepath: str | Path,
    metadata: dict | None = None,
) -> Path:
    """Export a trajectory to a compact JSON file for visualization.

    Args:
        trajectory: Propagated trajectory
        filepath: Path to save the JSON file
        metadata: Extra entries merged into the metadata block (e.g. beta, mu)

    Returns:
        Path the file was written to
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        json.dump(trajectory_to_dict(trajectory, metadata), f, cls=NumpyEncoder)

    return path
