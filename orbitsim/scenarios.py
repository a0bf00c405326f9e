"""Preset initial conditions.

Example:
    >>> from orbitsim.scenarios import circular_orbit, rocket_launch
    >>>
    >>> rocket = rocket_launch()                     # 10 km above Earth, engine pointing up
    >>> satellite = circular_orbit(altitude=400e3)   # 400 km circular orbit
"""

import math

from beartype import beartype

from orbitsim.dynamics.body import Body
from orbitsim.environment.reference_frame import PhysicsConfig

DEFAULT_CONFIG = PhysicsConfig()


@beartype
def rocket_launch(
    altitude: float | int = 10000.0,
    mass: float | int = 7000.0,
    thrust: float | int = 100000.0,
    size: float | int = 20000.0,
    config: PhysicsConfig = DEFAULT_CONFIG,
    name: str = "Rocket",
) -> Body:
    """Rocket at rest above the north pole with thrust pointing straight up.

    Args:
        altitude: Height of the center of mass above the surface [m]
        mass: Vehicle mass [kg]
        thrust: Engine force [N]
        size: Cosmetic width and height [m]
        config: Physical constants (for the reference radius)
        name: Body label
    """
    radius = config.reference_frame.radius
    return Body(
        name=name,
        position=(0.0, radius + altitude),
        extent=(size, size),
        mass=mass,
        engine_force=(0.0, thrust),
    )


@beartype
def circular_orbit(
    altitude: float | int,
    mass: float | int = 1000.0,
    angle_deg: float | int = 90.0,
    config: PhysicsConfig = DEFAULT_CONFIG,
    name: str = "Satellite",
    size: float | int = 10000.0,
) -> Body:
    """Body on a counter-clockwise circular orbit.

    Args:
        altitude: Orbit altitude above the surface [m]
        mass: Body mass [kg]
        angle_deg: Polar angle of the starting position (90 = straight up) [degrees]
        config: Physical constants
        name: Body label
        size: Cosmetic width and height [m]
    """
    r = config.reference_frame.radius + altitude
    v = config.circular_velocity(r)
    theta = math.radians(angle_deg)

    return Body(
        name=name,
        position=(r * math.cos(theta), r * math.sin(theta)),
        extent=(size, size),
        mass=mass,
        velocity=(-v * math.sin(theta), v * math.cos(theta)),
    )
