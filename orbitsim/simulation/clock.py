"""Frame counter for step-driven playback."""

from dataclasses import dataclass

from beartype import beartype

from orbitsim.errors import ConfigurationError


@beartype
@dataclass
class SimulationClock:
    """Ordinal frame counter paired with a fixed frame duration.

    The clock has no wall-clock coupling. It only tracks how many frames the
    simulation is ahead of (or behind) its start, so rewinding is exact on the
    clock even though it is not exact on the bodies.

    Attributes:
        frame_duration: Simulated time per frame [s]
        frame: Current frame number
    """
    frame_duration: float | int
    frame: int = 0

    def __post_init__(self) -> None:
        if not self.frame_duration > 0:
            raise ConfigurationError(f"Frame duration must be positive, got {self.frame_duration!r}")
        self.frame_duration = float(self.frame_duration)

    @property
    def elapsed(self) -> float:
        """Simulated time since frame 0 [s]."""
        return self.frame * self.frame_duration

    def signed_dt(self, direction: int) -> float:
        """Time step for one frame forward (+1) or backward (-1) [s]."""
        _check_direction(direction)
        return direction * self.frame_duration

    def advance(self, direction: int) -> int:
        """Move one frame forward (+1) or backward (-1) and return the new frame."""
        _check_direction(direction)
        self.frame += direction
        return self.frame

    def reset(self) -> None:
        self.frame = 0


def _check_direction(direction: int) -> None:
    if direction not in (1, -1):
        raise ValueError(f"Direction must be +1 or -1, got {direction!r}")
