"""Dynamics module for planar orbit simulation.

This module provides the body state representation and the trapezoidal
integrator that advances it under gravity and engine thrust.

Example:
    >>> from orbitsim.dynamics import Body, Integrator
    >>>
    >>> body = Body(name="Probe", position=(0.0, 7.0e6), extent=(10.0, 10.0), mass=500.0)
    >>> integrator = Integrator()
    >>> (body,) = integrator.step([body], dt=0.1, engine_on=False)
"""

from orbitsim.dynamics.body import (
    Body,
    Vector2,
    as_vector2,
    validate_mass,
    vector2,
)
from orbitsim.dynamics.integrator import (
    Integrator,
    gravitational_force,
    net_force,
    step,
    step_body,
)

__all__ = [
    # Body
    "Body",
    "Vector2",
    "as_vector2",
    "vector2",
    "validate_mass",
    # Integration
    "Integrator",
    "gravitational_force",
    "net_force",
    "step",
    "step_body",
]
