#!/usr/bin/env python
"""Rocket launch, engine cutoff and rewind example.

This example walks through the playback controls:
1. Start a 7 t rocket 10 km above Earth with 100 kN of thrust
2. Burn for 60 s, then stop the engine and coast
3. Rewind part of the coast and compare with the recorded state
4. Save a trajectory plot and the frame data

The rocket climbs straight up, so the interesting output is altitude and
vertical speed against time.
"""

import sys
from pathlib import Path

import numpy as np

from orbitsim import (
    SimConfig,
    Simulator,
    configure_logging,
    format_simulation_summary,
    plot_altitude,
    rocket_launch,
)

BURN_FRAMES = 600  # 60 s at 0.1 s per frame
COAST_FRAMES = 300
REWIND_FRAMES = 100


def main(output_dir: Path = Path("outputs/launch_and_coast")) -> None:
    """Run the launch example."""
    configure_logging()

    print("=" * 60)
    print("ROCKET LAUNCH AND COAST")
    print("=" * 60)

    # =========================================================================
    # 1. Initial conditions
    # =========================================================================
    print("\n1. Initial conditions...")

    sim = Simulator([rocket_launch()], SimConfig(frame_duration=0.1))
    print(format_simulation_summary(sim))

    # =========================================================================
    # 2. Burn, then coast
    # =========================================================================
    print("\n2. Burning...")

    sim.run(BURN_FRAMES)
    rocket = sim.bodies[0]
    print(f"   Cutoff at t = {sim.time:.1f} s")
    print(f"   Altitude:  {(np.linalg.norm(rocket.position) - 6.371e6) / 1000:.2f} km")
    print(f"   Speed:     {rocket.speed:.1f} m/s")

    sim.stop_engine()
    sim.run(COAST_FRAMES)
    coasted = sim.bodies[0]
    print(f"   After coasting to t = {sim.time:.1f} s: v_y = {coasted.velocity[1]:.1f} m/s")

    # =========================================================================
    # 3. Rewind
    # =========================================================================
    print("\n3. Rewinding...")

    recorded = sim.history().snapshots[BURN_FRAMES + COAST_FRAMES - REWIND_FRAMES].bodies[0]
    sim.run(-REWIND_FRAMES)
    rewound = sim.bodies[0]
    drift = np.linalg.norm(rewound.position - recorded.position)
    print(f"   Frame {sim.frame}: position differs from the recorded state by {drift:.3f} m")

    # =========================================================================
    # 4. Save results
    # =========================================================================
    print("\n4. Saving results...")

    output_dir.mkdir(parents=True, exist_ok=True)
    result = sim.history()

    fig = plot_altitude(result)
    fig.savefig(output_dir / "altitude.png", dpi=100)
    print(f"   Plot saved: {output_dir}/altitude.png")

    result.to_dataframe().write_csv(output_dir / "frames.csv")
    print(f"   Data saved: {output_dir}/frames.csv")

    print("\n" + format_simulation_summary(sim))
    print("\n" + "=" * 60)
    print("SIMULATION COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main(Path(sys.argv[1]) if len(sys.argv) > 1 else Path("outputs/launch_and_coast"))
