#!/usr/bin/env python
"""Segmented solar sail trajectory example.

This example flies a sail with lightness number 0.1 from a circular 1 AU
orbit through three attitude segments:
1. Raise the orbit with the sail tilted +35.3° (maximum tangential thrust)
2. Lower it briefly with the sail tilted -35.3°
3. Coast edge-on to the Sun (90°, no radiation pressure)

It then prints a summary and writes a plot and a JSON export.
"""

import logging
from pathlib import Path

import numpy as np

from solarsail import (
    SailState,
    export_trajectory_to_json,
    plot_state_history,
    plot_trajectory,
    propagate_sail,
)

BETA = 0.1
MU = 1.0
ANGLES = [0.6155, -0.6155, 1.5707963]
DURATIONS = [5.0, 2.0, 1.0]


def main() -> None:
    """Run the sail trajectory example."""
    logging.basicConfig(format="%(name)s: %(message)s")
    logging.getLogger("solarsail").setLevel(logging.DEBUG)

    print("=" * 60)
    print("SOLAR SAIL TRAJECTORY")
    print("=" * 60)

    y0 = SailState.circular(radius=1.0, mu=MU).to_array()
    print(f"\nLightness number: {BETA}")
    print(f"Initial state:    r={y0[0]:.3f}, theta={y0[1]:.3f}, v_r={y0[2]:.3f}, v_t={y0[3]:.3f}")

    trajectory = propagate_sail(BETA, MU, y0, 0.0, ANGLES, DURATIONS)

    print("\nSegments:")
    for i, (seg, control) in enumerate(zip(trajectory, trajectory.controls)):
        r_end, theta_end, _, _ = seg.final_state
        print(
            f"   {i + 1}. sia={control.angle_deg:+6.1f}°  "
            f"t=[{seg.times[0]:5.2f}, {seg.final_time:5.2f}]  "
            f"r_end={r_end:.4f}  theta_end={np.degrees(theta_end):8.2f}°"
        )

    final = SailState.from_array(trajectory.final_state)
    print(f"\nFinal radius:     {final.r:.4f}")
    print(f"Maximum radius:   {trajectory.max_radius:.4f}")
    print(f"Specific energy:  {final.specific_energy(MU):.4f}")

    output_dir = Path("outputs/sail_trajectory")
    output_dir.mkdir(parents=True, exist_ok=True)

    fig = plot_trajectory(trajectory, title=f"Solar Sail Trajectory (beta={BETA})")
    fig.savefig(output_dir / "trajectory.png", dpi=150)
    print(f"\nPlot saved: {output_dir}/trajectory.png")

    fig = plot_state_history(trajectory)
    fig.savefig(output_dir / "state_history.png", dpi=150)
    print(f"Plot saved: {output_dir}/state_history.png")

    path = export_trajectory_to_json(
        trajectory, output_dir / "trajectory.json", metadata={"beta": BETA, "mu": MU},
    )
    print(f"Data saved: {path}")


if __name__ == "__main__":
    main()
