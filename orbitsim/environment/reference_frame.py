"""Reference frame and physical constants for orbit simulation.

The reference frame is the massive body (a planet) fixed at the origin of the
simulation's coordinate system. It is the only source of gravity; simulated
bodies do not attract each other.

Constants:
- G: Newtonian gravitational constant
- MASS_OF_EARTH, RADIUS_OF_EARTH: defaults for the reference frame

The radius is cosmetic. It is used for display and altitude readouts and
never enters the equations of motion.

Example:
    >>> from orbitsim.environment import EARTH, PhysicsConfig, ReferenceFrame
    >>>
    >>> config = PhysicsConfig()
    >>> config.gravitational_parameter  # G * M [m^3/s^2]
    >>>
    >>> # A lighter planet for quick tests
    >>> moon = ReferenceFrame(mass=7.342e22, radius=1.7374e6, name="Moon")
    >>> config = PhysicsConfig(reference_frame=moon)
"""

import math
from dataclasses import dataclass, field

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from orbitsim.errors import ConfigurationError

# =============================================================================
# Constants
# =============================================================================

G: float = 6.674e-11  # Gravitational constant [m^3/(kg*s^2)]
MASS_OF_EARTH: float = 5.972e24  # [kg]
RADIUS_OF_EARTH: float = 6371.0 * 1000.0  # Mean radius [m]


def _require_positive(name: str, value: float | int) -> None:
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be finite and positive, got {value!r}")


# =============================================================================
# Reference Frame
# =============================================================================


@beartype
@dataclass(frozen=True)
class ReferenceFrame:
    """Gravitating body fixed at the origin.

    Attributes:
        mass: Mass of the body [kg]
        radius: Nominal radius [m], display and altitude only
        name: Label for display
    """
    mass: float | int
    radius: float | int
    name: str = "Earth"

    def __post_init__(self) -> None:
        """Validate constants."""
        _require_positive("Reference frame mass", self.mass)
        _require_positive("Reference frame radius", self.radius)
        object.__setattr__(self, "mass", float(self.mass))
        object.__setattr__(self, "radius", float(self.radius))

    @property
    def position(self) -> NDArray[np.float64]:
        """Position of the frame's center [m], always the origin."""
        return np.zeros(2)

    @property
    def diameter(self) -> float:
        """Diameter [m], the frame's cosmetic width and height."""
        return 2.0 * self.radius

    def distance_to(self, position: NDArray[np.float64]) -> float:
        """Distance from the frame's center to a point [m]."""
        return float(np.linalg.norm(np.asarray(position, dtype=np.float64) - self.position))

    def altitude_of(self, position: NDArray[np.float64]) -> float:
        """Height of a point above the nominal surface [m]."""
        return self.distance_to(position) - self.radius


EARTH = ReferenceFrame(mass=MASS_OF_EARTH, radius=RADIUS_OF_EARTH, name="Earth")


# =============================================================================
# Physics Configuration
# =============================================================================


@beartype
@dataclass(frozen=True)
class PhysicsConfig:
    """Constants the integrator depends on.

    Passed explicitly to the integrator so tests can swap in alternate
    constants without touching module globals.

    Attributes:
        gravitational_constant: G [m^3/(kg*s^2)]
        reference_frame: Gravitating body at the origin
    """
    gravitational_constant: float | int = G
    reference_frame: ReferenceFrame = field(default=EARTH)

    def __post_init__(self) -> None:
        """Validate constants."""
        _require_positive("Gravitational constant", self.gravitational_constant)
        object.__setattr__(self, "gravitational_constant", float(self.gravitational_constant))

    @property
    def gravitational_parameter(self) -> float:
        """Standard gravitational parameter mu = G*M [m^3/s^2]."""
        return self.gravitational_constant * self.reference_frame.mass

    def surface_gravity(self) -> float:
        """Gravitational acceleration at the nominal surface [m/s^2]."""
        return self.gravitational_parameter / self.reference_frame.radius ** 2

    def circular_velocity(self, radius: float | int) -> float:
        """Circular orbit speed at a distance from the frame's center [m/s]."""
        _require_positive("Orbit radius", radius)
        return math.sqrt(self.gravitational_parameter / radius)

    def escape_velocity(self, radius: float | int) -> float:
        """Escape speed at a distance from the frame's center [m/s]."""
        _require_positive("Orbit radius", radius)
        return math.sqrt(2.0 * self.gravitational_parameter / radius)
