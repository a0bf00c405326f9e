"""Display helpers for orbit simulation.

Provides:
- Screen transform from simulation meters to pixel offsets
- Text summaries of the simulation state
- Trajectory plots

None of this feeds back into the physics. All plots use matplotlib with the
package's color palette.
"""

from dataclasses import dataclass

import matplotlib.pyplot as plt
import numpy as np
from beartype import beartype
from matplotlib.figure import Figure
from matplotlib.patches import Circle
from numpy.typing import NDArray

from orbitsim.dynamics.body import Body, Vector2Like, as_vector2
from orbitsim.environment.reference_frame import EARTH, ReferenceFrame
from orbitsim.simulation.simulator import SimulationResult, Simulator

# =============================================================================
# Plot Style Configuration
# =============================================================================

COLORS = {
    "frame": "#8B4513",  # Brown planet
    "body": "#D62728",  # Red bodies
    "trace": "#808080",  # Gray trails
    "grid": "#CCCCCC",
    "text": "#333333",
}

DEFAULT_FIGSIZE = (8.0, 8.0)

# =============================================================================
# Screen Transform
# =============================================================================


@beartype
@dataclass(frozen=True)
class ScreenTransform:
    """Affine map from simulation meters to screen pixels.

    Screen y grows downward, so the simulation's +y axis is flipped. Boxes are
    positioned by their top-left corner.

    Attributes:
        scale: Meters per pixel
        origin_left: Screen x of the simulation origin [px]
        origin_top: Screen y of the simulation origin [px]
    """
    scale: float | int = 10000.0
    origin_left: float | int = 650.0
    origin_top: float | int = 1000.0

    def __post_init__(self) -> None:
        if not self.scale > 0:
            raise ValueError(f"Scale must be positive, got {self.scale!r}")
        for attr in ("scale", "origin_left", "origin_top"):
            object.__setattr__(self, attr, float(getattr(self, attr)))

    def to_screen(self, position: Vector2Like, extent: Vector2Like = (0.0, 0.0)) -> tuple[float, float]:
        """Top-left corner of a box centered on ``position``.

        Returns:
            (top, left) in pixels
        """
        x, y = as_vector2(position, "position")
        width, height = as_vector2(extent, "extent")
        top = self.origin_top - (y + height / 2) / self.scale
        left = self.origin_left + (x - width / 2) / self.scale
        return float(top), float(left)

    def size_on_screen(self, extent: Vector2Like) -> tuple[float, float]:
        """(width, height) in pixels."""
        width, height = as_vector2(extent, "extent")
        return float(width / self.scale), float(height / self.scale)

    def body_box(self, body: Body) -> dict[str, float]:
        """Absolute-positioned box for a body."""
        top, left = self.to_screen(body.position, body.extent)
        width, height = self.size_on_screen(body.extent)
        return {"top": top, "left": left, "width": width, "height": height}

    def frame_box(self, frame: ReferenceFrame = EARTH) -> dict[str, float]:
        """Box for the reference frame, with its corner radius."""
        extent = (frame.diameter, frame.diameter)
        top, left = self.to_screen(frame.position, extent)
        width, height = self.size_on_screen(extent)
        return {
            "top": top,
            "left": left,
            "width": width,
            "height": height,
            "border_radius": frame.radius / self.scale,
        }


# =============================================================================
# Readouts
# =============================================================================


@beartype
def surface_altitude(body: Body, frame: ReferenceFrame = EARTH) -> float:
    """Height of the body's lower edge above the frame's surface [m]."""
    return frame.altitude_of(body.position) - body.height / 2


@beartype
def format_body_summary(body: Body, frame: ReferenceFrame = EARTH) -> str:
    """Format a body's state as readable text."""
    lines = [
        body.name,
        f"  x: {body.position[0]:.3f} m",
        f"  y: {body.position[1]:.3f} m",
        f"  Altitude: {surface_altitude(body, frame) / 1000:.3f} km",
        f"  Acceleration: ({body.acceleration[0]:.4f}, {body.acceleration[1]:.4f}) m/s^2",
        f"  Velocity: ({body.velocity[0]:.4f}, {body.velocity[1]:.4f}) m/s",
    ]
    return "\n".join(lines)


@beartype
def format_simulation_summary(sim: Simulator) -> str:
    """Format the simulator's frame, clock and body states as text."""
    frame = sim.config.physics.reference_frame
    lines = [
        f"Frame: {sim.frame}",
        f"Time: {sim.time:.1f} s",
        f"Speed: {sim.config.speed_scale_factor:g}x",
        f"Engine: {'on' if sim.engine_on else 'off'}",
    ]
    if sim.error is not None:
        lines.append(f"Halted: {sim.error}")
    for body in sim.bodies:
        lines.append(format_body_summary(body, frame))
    return "\n".join(lines)


# =============================================================================
# Trajectory Plot
# =============================================================================


def _setup_axes(ax, title: str) -> None:
    ax.set_aspect("equal")
    ax.grid(True, color=COLORS["grid"], alpha=0.5)
    ax.set_xlabel("x [km]", color=COLORS["text"])
    ax.set_ylabel("y [km]", color=COLORS["text"])
    ax.set_title(title, color=COLORS["text"])


@beartype
def plot_trajectory(
    result: SimulationResult,
    frame: ReferenceFrame = EARTH,
    show_frame: bool = True,
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
    title: str = "Trajectory",
) -> Figure:
    """Plot every body's path around the reference frame.

    Args:
        result: Recorded simulation snapshots
        frame: Reference frame to draw
        show_frame: Draw the reference frame's disc
        figsize: Figure size in inches
        title: Axes title

    Returns:
        matplotlib Figure
    """
    fig, ax = plt.subplots(figsize=figsize)
    _setup_axes(ax, title)

    if show_frame:
        ax.add_patch(Circle((0.0, 0.0), frame.radius / 1000, color=COLORS["frame"], alpha=0.8, label=frame.name))

    for index, name in enumerate(result.body_names):
        path: NDArray[np.float64] = result.position(index) / 1000
        ax.plot(path[:, 0], path[:, 1], color=COLORS["trace"], linewidth=1.0)
        ax.plot(path[-1, 0], path[-1, 1], "s", color=COLORS["body"], label=name)

    ax.autoscale_view()
    ax.legend(loc="upper right")
    fig.tight_layout()
    return fig


@beartype
def plot_altitude(
    result: SimulationResult,
    frame: ReferenceFrame = EARTH,
    figsize: tuple[float, float] = (10.0, 5.0),
) -> Figure:
    """Plot altitude of each body's center of mass against simulated time."""
    fig, ax = plt.subplots(figsize=figsize)
    ax.grid(True, color=COLORS["grid"], alpha=0.5)
    ax.set_xlabel("Time [s]", color=COLORS["text"])
    ax.set_ylabel("Altitude [km]", color=COLORS["text"])

    time = result.time
    for index, name in enumerate(result.body_names):
        altitude = np.linalg.norm(result.position(index), axis=1) - frame.radius
        ax.plot(time, altitude / 1000, label=name)

    ax.legend(loc="best")
    fig.tight_layout()
    return fig
