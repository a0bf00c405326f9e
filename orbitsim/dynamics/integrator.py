"""Trapezoidal integrator for bodies orbiting a fixed reference frame.

Each call advances (dt > 0) or rewinds (dt < 0) every body by one step:

    d   = frame_position - position
    F_g = G * M * m / |d|^2 along d / |d|
    a'  = (F_g + engine_force if engine on) / m
    v'  = v + (a' + a) * dt / 2
    p'  = p + (v' + v) * dt / 2

Acceleration is memoized on the body, so the velocity update averages the
previous step's acceleration with the new one. Bodies do not interact.

The scheme is not self-inverse: stepping by dt and then by -dt does not
return exactly to the starting state, because the second call evaluates the
force at a different point than the first. Rewinding therefore accumulates a
small drift.

The per-body arithmetic is a numba-compiled scalar kernel.

Example:
    >>> from orbitsim.dynamics import Body, step
    >>>
    >>> rocket = Body(
    ...     name="Rocket",
    ...     position=(0.0, 6381000.0),
    ...     extent=(20000.0, 20000.0),
    ...     mass=7000.0,
    ...     engine_force=(0.0, 100000.0),
    ... )
    >>> (rocket,) = step([rocket], dt=0.1, engine_on=True)
"""

import math
from collections.abc import Sequence

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

from orbitsim.dynamics.body import Body, validate_mass
from orbitsim.environment.reference_frame import PhysicsConfig
from orbitsim.errors import DomainError, ZeroSeparationError

DEFAULT_CONFIG = PhysicsConfig()

# =============================================================================
# Numba-Optimized Core Functions
# =============================================================================


@njit(cache=True, fastmath=True)
def _gravitational_force(
    px: float, py: float,
    mass: float,
    frame_x: float, frame_y: float,
    gm: float,
) -> tuple[float, float]:
    """Numba-optimized point-mass gravity force.

    F = G*M*m/r^2 * d/r, d pointing from the body to the frame.
    """
    dx = frame_x - px
    dy = frame_y - py
    r = np.sqrt(dx*dx + dy*dy)

    f_mag = gm * mass / (r * r)

    return (f_mag * dx / r, f_mag * dy / r)


@njit(cache=True, fastmath=True)
def _trapezoidal_step_core(
    # Kinematic state
    px: float, py: float,
    vx: float, vy: float,
    ax: float, ay: float,
    mass: float,
    # Thrust (zero when the engine is off)
    thrust_x: float, thrust_y: float,
    # Reference frame
    frame_x: float, frame_y: float,
    gm: float,
    # Time step
    dt: float,
) -> tuple[float, float, float, float, float, float]:
    """Numba-optimized trapezoidal step for one body."""
    gx, gy = _gravitational_force(px, py, mass, frame_x, frame_y, gm)

    # New acceleration from net force
    ax_new = (thrust_x + gx) / mass
    ay_new = (thrust_y + gy) / mass

    # Average old and new acceleration
    h = dt / 2
    vx_new = vx + (ax_new + ax) * h
    vy_new = vy + (ay_new + ay) * h

    # Average old and new velocity
    px_new = px + (vx_new + vx) * h
    py_new = py + (vy_new + vy) * h

    return (px_new, py_new, vx_new, vy_new, ax_new, ay_new)


# =============================================================================
# Validation
# =============================================================================


def _validate_dt(dt: float | int) -> None:
    if not math.isfinite(dt) or dt == 0:
        raise DomainError(f"Time step must be finite and non-zero, got {dt!r}")


def _validate_body(body: Body, config: PhysicsConfig) -> None:
    validate_mass(body.mass, body.name)
    frame_position = config.reference_frame.position
    if body.position[0] == frame_position[0] and body.position[1] == frame_position[1]:
        raise ZeroSeparationError(
            f"Body {body.name!r} coincides with the center of {config.reference_frame.name}"
        )


# =============================================================================
# Forces
# =============================================================================


@beartype
def gravitational_force(
    body: Body,
    config: PhysicsConfig = DEFAULT_CONFIG,
) -> NDArray[np.float64]:
    """Gravitational force on a body, directed toward the reference frame.

    Args:
        body: Body to evaluate
        config: Physical constants

    Returns:
        Force vector [N]

    Raises:
        ZeroSeparationError: body is at the frame's center
    """
    _validate_body(body, config)
    frame_x, frame_y = config.reference_frame.position
    fx, fy = _gravitational_force(
        body.position[0], body.position[1],
        body.mass,
        frame_x, frame_y,
        config.gravitational_parameter,
    )
    return np.array([fx, fy])


@beartype
def net_force(
    body: Body,
    engine_on: bool,
    config: PhysicsConfig = DEFAULT_CONFIG,
) -> NDArray[np.float64]:
    """Gravity plus thrust (when the engine is on) [N]."""
    force = gravitational_force(body, config)
    if engine_on:
        force = force + body.engine_force
    return force


# =============================================================================
# Integration
# =============================================================================


@beartype
def step_body(
    body: Body,
    dt: float | int,
    engine_on: bool,
    config: PhysicsConfig = DEFAULT_CONFIG,
) -> Body:
    """Advance a single body by one trapezoidal step.

    Args:
        body: Current state
        dt: Time step [s], negative to rewind
        engine_on: Whether the body's engine force is applied
        config: Physical constants

    Returns:
        New body with updated position, velocity and acceleration
    """
    _validate_dt(dt)
    _validate_body(body, config)
    dt = float(dt)

    thrust = body.engine_force if engine_on else (0.0, 0.0)
    frame_x, frame_y = config.reference_frame.position

    result = _trapezoidal_step_core(
        body.position[0], body.position[1],
        body.velocity[0], body.velocity[1],
        body.acceleration[0], body.acceleration[1],
        body.mass,
        thrust[0], thrust[1],
        frame_x, frame_y,
        config.gravitational_parameter,
        dt,
    )

    return body.with_kinematics(
        position=np.array([result[0], result[1]]),
        velocity=np.array([result[2], result[3]]),
        acceleration=np.array([result[4], result[5]]),
    )


@beartype
def step(
    bodies: Sequence[Body],
    dt: float | int,
    engine_on: bool,
    config: PhysicsConfig = DEFAULT_CONFIG,
) -> tuple[Body, ...]:
    """Advance every body by one step.

    The input is left untouched. If any body is invalid the whole call fails
    and no partial result is returned.

    Args:
        bodies: Current states
        dt: Time step [s], negative to rewind
        engine_on: Whether engine forces are applied this step
        config: Physical constants

    Returns:
        New states in the same order
    """
    _validate_dt(dt)
    return tuple(step_body(body, dt, engine_on, config) for body in bodies)


@beartype
class Integrator:
    """Trapezoidal integrator bound to a set of physical constants.

    Example:
        >>> from orbitsim.environment import PhysicsConfig, ReferenceFrame
        >>> planet = ReferenceFrame(mass=1.0e20, radius=1.0e5)
        >>> integrator = Integrator(PhysicsConfig(reference_frame=planet))
        >>> bodies = integrator.step(bodies, dt=1.0, engine_on=False)
    """

    def __init__(self, config: PhysicsConfig | None = None) -> None:
        """Initialize integrator.

        Args:
            config: Physical constants (defaults to Earth)
        """
        self.config = config or DEFAULT_CONFIG

    def step(
        self,
        bodies: Sequence[Body],
        dt: float | int,
        engine_on: bool,
    ) -> tuple[Body, ...]:
        """Advance every body by one step. See :func:`step`."""
        return step(bodies, dt, engine_on, self.config)

    def gravitational_force(self, body: Body) -> NDArray[np.float64]:
        """Gravitational force on a body [N]."""
        return gravitational_force(body, self.config)

    def net_force(self, body: Body, engine_on: bool) -> NDArray[np.float64]:
        """Gravity plus thrust [N]."""
        return net_force(body, engine_on, self.config)
