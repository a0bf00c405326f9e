"""Planar point-mass body for orbit simulation.

A body carries its kinematic state in the reference frame's coordinates:
- Position (2): [x, y] center of mass [m]
- Velocity (2): [vx, vy] [m/s]
- Acceleration (2): [ax, ay] from the previous step [m/s^2]

plus constant properties (name, mass, extent, engine thrust). Bodies are
immutable snapshots; the integrator returns new bodies instead of updating
them in place. All vectors are numpy float64 arrays of shape (2,) and are
marked read-only.

Coordinate frame:
- Origin at the reference frame's center, +y up on screen
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from orbitsim.errors import ZeroOrNegativeMassError

Vector2 = NDArray[np.float64]
Vector2Like = NDArray[np.float64] | Sequence[float | int]

# =============================================================================
# Vector Utilities
# =============================================================================


@beartype
def vector2(x: float | int, y: float | int) -> Vector2:
    """Build a read-only 2D vector."""
    return as_vector2((x, y))


@beartype
def as_vector2(value: Vector2Like, name: str = "vector") -> Vector2:
    """Convert a value to a read-only, finite float64 array of shape (2,).

    Args:
        value: Array or sequence of two numbers
        name: Label used in error messages

    Returns:
        Fresh array that does not share memory with ``value``
    """
    arr = np.array(value, dtype=np.float64)
    if arr.shape != (2,):
        raise ValueError(f"{name} must be shape (2,), got {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must be finite, got {arr}")
    arr.setflags(write=False)
    return arr


def validate_mass(mass: float | int, name: str = "body") -> None:
    """Reject masses the equations of motion cannot divide by."""
    if not math.isfinite(mass) or mass <= 0:
        raise ZeroOrNegativeMassError(f"Mass of {name!r} must be finite and positive, got {mass!r}")


# =============================================================================
# Body
# =============================================================================


@beartype
@dataclass(frozen=True, eq=False)
class Body:
    """Simulated point mass.

    Attributes:
        name: Label
        position: [x, y] center of mass in the reference frame [m]
        extent: [width, height] [m], cosmetic only
        mass: Mass [kg], must be positive
        engine_force: Constant thrust applied while the engine is on [N]
        velocity: [vx, vy] [m/s]
        acceleration: [ax, ay] computed on the previous step [m/s^2]
    """
    name: str
    position: Vector2Like
    extent: Vector2Like
    mass: float | int
    engine_force: Vector2Like = field(default=(0.0, 0.0))
    velocity: Vector2Like = field(default=(0.0, 0.0))
    acceleration: Vector2Like = field(default=(0.0, 0.0))

    def __post_init__(self) -> None:
        """Validate and freeze vectors."""
        validate_mass(self.mass, self.name)
        object.__setattr__(self, "mass", float(self.mass))
        for attr in ("position", "extent", "engine_force", "velocity", "acceleration"):
            object.__setattr__(self, attr, as_vector2(getattr(self, attr), attr))
        if np.any(self.extent < 0):
            raise ValueError(f"Extent must be non-negative, got {self.extent}")

    @property
    def width(self) -> float:
        """Cosmetic width [m]."""
        return float(self.extent[0])

    @property
    def height(self) -> float:
        """Cosmetic height [m]."""
        return float(self.extent[1])

    @property
    def speed(self) -> float:
        """Speed magnitude [m/s]."""
        return float(np.linalg.norm(self.velocity))

    def distance_from(self, point: Vector2Like) -> float:
        """Distance from the center of mass to a point [m]."""
        return float(np.linalg.norm(self.position - as_vector2(point, "point")))

    def with_kinematics(
        self,
        position: Vector2Like,
        velocity: Vector2Like,
        acceleration: Vector2Like,
    ) -> "Body":
        """Copy of this body with a new kinematic state."""
        return replace(
            self,
            position=position,
            velocity=velocity,
            acceleration=acceleration,
        )

    def to_dict(self) -> dict[str, float | str]:
        """Flatten into a row of scalars (for tabular output)."""
        return {
            "name": self.name,
            "mass": self.mass,
            "x": float(self.position[0]),
            "y": float(self.position[1]),
            "vx": float(self.velocity[0]),
            "vy": float(self.velocity[1]),
            "ax": float(self.acceleration[0]),
            "ay": float(self.acceleration[1]),
            "width": self.width,
            "height": self.height,
        }
