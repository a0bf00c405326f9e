"""Environment models for orbit simulation.

Provides the reference frame (the gravitating body at the origin) and the
physical constants the integrator is configured with.

Example:
    >>> from orbitsim.environment import EARTH, PhysicsConfig
    >>>
    >>> config = PhysicsConfig()
    >>> g0 = config.surface_gravity()  # m/s^2
"""

from orbitsim.environment.reference_frame import (
    EARTH,
    G,
    MASS_OF_EARTH,
    RADIUS_OF_EARTH,
    PhysicsConfig,
    ReferenceFrame,
)

__all__ = [
    "EARTH",
    "G",
    "MASS_OF_EARTH",
    "RADIUS_OF_EARTH",
    "PhysicsConfig",
    "ReferenceFrame",
]
