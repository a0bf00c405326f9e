"""Simulation module for step-driven orbit playback.

Provides the simulator that owns the current body states and frame counter
and calls the integrator once per tick, plus timed playback.

Example:
    >>> from orbitsim.simulation import Simulator, SimConfig
    >>> from orbitsim.scenarios import rocket_launch
    >>>
    >>> sim = Simulator([rocket_launch()], SimConfig(frame_duration=0.1))
    >>> sim.next_frame()
    >>> sim.fast_forward()
    >>> sim.pause()
"""

from orbitsim.simulation.clock import SimulationClock
from orbitsim.simulation.playback import RepeatingTask
from orbitsim.simulation.simulator import (
    FRAME_DURATION,
    MAX_RECORDED_FRAMES,
    SPEED_SCALE_FACTOR,
    SimConfig,
    SimulationResult,
    Simulator,
    Snapshot,
    TracePoint,
)

__all__ = [
    "FRAME_DURATION",
    "MAX_RECORDED_FRAMES",
    "SPEED_SCALE_FACTOR",
    "RepeatingTask",
    "SimConfig",
    "SimulationClock",
    "SimulationResult",
    "Simulator",
    "Snapshot",
    "TracePoint",
]
