"""orbitsim - Planar orbit simulation around a fixed reference body.

This package integrates the motion of point-mass bodies under the gravity of
a fixed massive body (a planet at the origin) plus an optional constant
engine thrust, and provides a step-driven simulator for playing the motion
forward and backward.

Example:
    >>> from orbitsim import Simulator, format_simulation_summary, rocket_launch
    >>>
    >>> sim = Simulator([rocket_launch()])
    >>> sim.run(100)  # 10 s of flight
    >>> print(format_simulation_summary(sim))
"""

__version__ = "0.1.0"

# Physics core
from orbitsim.dynamics import (
    Body,
    Integrator,
    as_vector2,
    gravitational_force,
    net_force,
    step,
    step_body,
    vector2,
)
from orbitsim.environment import (
    EARTH,
    G,
    MASS_OF_EARTH,
    RADIUS_OF_EARTH,
    PhysicsConfig,
    ReferenceFrame,
)

# Errors
from orbitsim.errors import (
    ConfigurationError,
    DomainError,
    OrbitSimError,
    SimulationHaltedError,
    ZeroOrNegativeMassError,
    ZeroSeparationError,
)
from orbitsim.log import configure_logging

# Presets
from orbitsim.scenarios import circular_orbit, rocket_launch

# Playback
from orbitsim.simulation import (
    RepeatingTask,
    SimConfig,
    SimulationClock,
    SimulationResult,
    Simulator,
    TracePoint,
)

# Display
from orbitsim.display import (
    ScreenTransform,
    format_body_summary,
    format_simulation_summary,
    plot_altitude,
    plot_trajectory,
    surface_altitude,
)

__all__ = [
    # Version
    "__version__",
    # Bodies and integration
    "Body",
    "Integrator",
    "as_vector2",
    "vector2",
    "gravitational_force",
    "net_force",
    "step",
    "step_body",
    # Environment
    "EARTH",
    "G",
    "MASS_OF_EARTH",
    "RADIUS_OF_EARTH",
    "PhysicsConfig",
    "ReferenceFrame",
    # Errors
    "OrbitSimError",
    "DomainError",
    "ZeroOrNegativeMassError",
    "ZeroSeparationError",
    "ConfigurationError",
    "SimulationHaltedError",
    # Logging
    "configure_logging",
    # Scenarios
    "rocket_launch",
    "circular_orbit",
    # Simulation
    "RepeatingTask",
    "SimConfig",
    "SimulationClock",
    "SimulationResult",
    "Simulator",
    "TracePoint",
    # Display
    "ScreenTransform",
    "surface_altitude",
    "format_body_summary",
    "format_simulation_summary",
    "plot_trajectory",
    "plot_altitude",
]
