"""Step-driven playback of an orbit simulation.

The simulator owns the current body states, a frame counter and the engine
flag, and calls the integrator once per tick. Ticks come from the caller
(next/previous frame) or from a repeating background task (fast-forward,
rewind). At most one repeating task is active; starting a new direction
cancels the previous one.

Architecture:
    Driver code (a UI, a script) calls:
    - sim.next_frame() / sim.previous_frame() -> one tick
    - sim.fast_forward() / sim.rewind() / sim.pause() -> timed playback
    - sim.bodies, sim.traces, sim.history() -> data for rendering

If the integrator rejects a state (DomainError), the simulator halts: playback
stops, ``error`` holds the message, and further steps raise
SimulationHaltedError until ``reset()``.

Example:
    >>> from orbitsim.scenarios import rocket_launch
    >>> from orbitsim.simulation import Simulator
    >>>
    >>> sim = Simulator([rocket_launch()])
    >>> for _ in range(100):
    ...     sim.next_frame()
    >>> sim.time
    10.0
"""

import threading
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from orbitsim.dynamics.body import Body
from orbitsim.dynamics.integrator import Integrator
from orbitsim.environment.reference_frame import PhysicsConfig
from orbitsim.errors import ConfigurationError, DomainError, SimulationHaltedError
from orbitsim.log import get_logger
from orbitsim.simulation.clock import SimulationClock
from orbitsim.simulation.playback import RepeatingTask

logger = get_logger("simulation")

FRAME_DURATION: float = 0.1  # Simulated time per frame [s]
SPEED_SCALE_FACTOR: float = 10.0  # Simulated seconds per wall-clock second
MAX_RECORDED_FRAMES: int = 10000  # Default cap on stored snapshots and trace points

# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass
class SimConfig:
    """Simulation configuration.

    Attributes:
        frame_duration: Simulated time per frame [s]
        speed_scale_factor: Playback speed relative to real time
        engine_on: Engine flag at start and after reset
        record_traces: Record a trace point per body per frame
        max_traces: Keep only the most recent trace points (None = unbounded)
        record_history: Keep a snapshot of every frame
        max_history: Keep only the most recent snapshots (None = unbounded)
        physics: Physical constants for the integrator
    """
    frame_duration: float | int = FRAME_DURATION
    speed_scale_factor: float | int = SPEED_SCALE_FACTOR
    engine_on: bool = True
    record_traces: bool = True
    max_traces: int | None = MAX_RECORDED_FRAMES
    record_history: bool = True
    max_history: int | None = MAX_RECORDED_FRAMES
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)

    def __post_init__(self) -> None:
        if not self.frame_duration > 0:
            raise ConfigurationError(f"frame_duration must be positive, got {self.frame_duration!r}")
        if not self.speed_scale_factor > 0:
            raise ConfigurationError(
                f"speed_scale_factor must be positive, got {self.speed_scale_factor!r}"
            )
        if self.max_traces is not None and self.max_traces < 1:
            raise ConfigurationError(f"max_traces must be at least 1, got {self.max_traces!r}")
        if self.max_history is not None and self.max_history < 1:
            raise ConfigurationError(f"max_history must be at least 1, got {self.max_history!r}")
        self.frame_duration = float(self.frame_duration)
        self.speed_scale_factor = float(self.speed_scale_factor)

    @property
    def playback_interval(self) -> float:
        """Wall-clock seconds between ticks during playback."""
        return self.frame_duration / self.speed_scale_factor


# =============================================================================
# Recorded Data
# =============================================================================


class TracePoint(NamedTuple):
    """Position of one body at one frame, for drawing its trail."""
    frame: int
    name: str
    position: NDArray[np.float64]
    extent: NDArray[np.float64]


class Snapshot(NamedTuple):
    """All body states at one frame."""
    frame: int
    time: float
    bodies: tuple[Body, ...]


# =============================================================================
# Simulator
# =============================================================================


@beartype
@dataclass
class Simulator:
    """Step-driven orbit simulator.

    State changes are serialized through a re-entrant lock, so a playback
    thread and direct calls never step the same state concurrently.
    """
    initial_bodies: Sequence[Body]
    config: SimConfig = field(default_factory=SimConfig)

    # Internal
    bodies: tuple[Body, ...] = field(init=False)
    clock: SimulationClock = field(init=False)
    engine_on: bool = field(init=False)
    error: str | None = field(default=None, init=False)
    _integrator: Integrator = field(init=False, repr=False)
    _lock: object = field(init=False, repr=False)
    _task: RepeatingTask | None = field(default=None, init=False, repr=False)
    _direction: int = field(default=0, init=False, repr=False)
    _traces: deque = field(init=False, repr=False)
    _history: deque = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialize state from the initial bodies."""
        self.initial_bodies = tuple(self.initial_bodies)
        self._integrator = Integrator(self.config.physics)
        self._lock = threading.RLock()
        self.clock = SimulationClock(frame_duration=self.config.frame_duration)
        self._restore()

    def _restore(self) -> None:
        self.bodies = self.initial_bodies
        self.clock.reset()
        self.engine_on = self.config.engine_on
        self.error = None
        self._traces = deque(maxlen=self.config.max_traces)
        self._history = deque(maxlen=self.config.max_history)
        if self.config.record_history:
            self._history.append(Snapshot(0, 0.0, self.bodies))

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def frame(self) -> int:
        """Current frame number."""
        return self.clock.frame

    @property
    def time(self) -> float:
        """Simulated time since the start [s]."""
        return self.clock.elapsed

    @property
    def is_halted(self) -> bool:
        return self.error is not None

    @property
    def is_playing(self) -> bool:
        """Whether a fast-forward or rewind task is running."""
        task = self._task
        return task is not None and task.is_running

    @property
    def playback_direction(self) -> int:
        """+1 while fast-forwarding, -1 while rewinding, 0 otherwise."""
        return self._direction if self.is_playing else 0

    @property
    def traces(self) -> list[TracePoint]:
        """Recorded trail points, oldest first."""
        with self._lock:
            return list(self._traces)

    # -------------------------------------------------------------------------
    # Stepping
    # -------------------------------------------------------------------------

    def _step(self, direction: int) -> tuple[Body, ...]:
        with self._lock:
            if self.error is not None:
                raise SimulationHaltedError(f"Simulation halted: {self.error}")

            dt = self.clock.signed_dt(direction)
            try:
                bodies = self._integrator.step(self.bodies, dt, self.engine_on)
            except DomainError as exc:
                self._halt(exc)
                raise

            self.bodies = bodies
            frame = self.clock.advance(direction)

            if self.config.record_traces:
                for body in bodies:
                    self._traces.append(TracePoint(frame, body.name, body.position, body.extent))
            if self.config.record_history:
                self._history.append(Snapshot(frame, self.clock.elapsed, bodies))

            logger.debug("frame %d (t=%.3f s)", frame, self.clock.elapsed)
            return bodies

    def _halt(self, exc: Exception) -> None:
        self.error = str(exc)
        logger.warning("Simulation halted at frame %d: %s", self.clock.frame, exc)
        task, self._task = self._task, None
        if task is not None:
            # May be running on the task's own thread, so don't join here
            task.cancel(timeout=0)

    @beartype
    def next_frame(self) -> tuple[Body, ...]:
        """Advance one frame."""
        return self._step(1)

    @beartype
    def previous_frame(self) -> tuple[Body, ...]:
        """Rewind one frame.

        Rewinding re-integrates with a negative time step, so it drifts
        slightly from the states originally visited.
        """
        return self._step(-1)

    @beartype
    def run(self, frames: int) -> tuple[Body, ...]:
        """Step synchronously; negative ``frames`` rewinds.

        Returns:
            Body states after the last step
        """
        direction = 1 if frames >= 0 else -1
        for _ in range(abs(frames)):
            self._step(direction)
        return self.bodies

    # -------------------------------------------------------------------------
    # Playback
    # -------------------------------------------------------------------------

    def _start_playback(self, direction: int) -> RepeatingTask:
        name = "fast-forward" if direction > 0 else "rewind"
        with self._lock:
            if self.error is not None:
                raise SimulationHaltedError(f"Simulation halted: {self.error}")
            previous, self._task = self._task, None
            if previous is not None:
                previous.cancel(timeout=0)
            callback = self.next_frame if direction > 0 else self.previous_frame
            task = RepeatingTask(callback, self.config.playback_interval, name=name)
            self._task = task
            self._direction = direction
            task.start()
        if previous is not None:
            previous.cancel()
        logger.info("%s started at frame %d", name, self.clock.frame)
        return task

    def fast_forward(self) -> RepeatingTask:
        """Step forward repeatedly until paused."""
        return self._start_playback(1)

    def rewind(self) -> RepeatingTask:
        """Step backward repeatedly until paused."""
        return self._start_playback(-1)

    def pause(self) -> None:
        """Stop any running playback. The current step, if any, completes."""
        with self._lock:
            task, self._task = self._task, None
            self._direction = 0
        if task is not None:
            task.cancel()
            logger.info("%s paused at frame %d", task.name, self.clock.frame)

    def stop_engine(self) -> None:
        """Pause playback and switch the engine off."""
        self.pause()
        with self._lock:
            self.engine_on = False
        logger.info("Engine stopped at frame %d", self.clock.frame)

    def set_engine(self, on: bool) -> None:
        """Switch the engine on or off without touching playback."""
        with self._lock:
            self.engine_on = on

    def reset(self) -> None:
        """Stop playback and return to the initial conditions."""
        self.pause()
        with self._lock:
            self._restore()
        logger.info("Simulation reset")

    # -------------------------------------------------------------------------
    # Results
    # -------------------------------------------------------------------------

    def history(self) -> "SimulationResult":
        """Recorded snapshots as a result object."""
        with self._lock:
            return SimulationResult(snapshots=list(self._history))


# =============================================================================
# Results and Analysis
# =============================================================================


@beartype
@dataclass
class SimulationResult:
    """Recorded simulation snapshots.

    Snapshots are stored in the order they were visited, so after a rewind the
    frame numbers are no longer monotonic.
    """
    snapshots: list[Snapshot]

    def __len__(self) -> int:
        return len(self.snapshots)

    @property
    def frames(self) -> NDArray[np.int64]:
        """Frame number of each snapshot."""
        return np.array([s.frame for s in self.snapshots], dtype=np.int64)

    @property
    def time(self) -> NDArray[np.float64]:
        """Simulated time of each snapshot [s]."""
        return np.array([s.time for s in self.snapshots], dtype=np.float64)

    @property
    def body_names(self) -> list[str]:
        if not self.snapshots:
            return []
        return [body.name for body in self.snapshots[0].bodies]

    def _column(self, index: int, attr: str) -> NDArray[np.float64]:
        return np.array([getattr(s.bodies[index], attr) for s in self.snapshots], dtype=np.float64)

    def position(self, index: int = 0) -> NDArray[np.float64]:
        """Position history of one body [m], shape (N, 2)."""
        return self._column(index, "position").reshape(-1, 2)

    def velocity(self, index: int = 0) -> NDArray[np.float64]:
        """Velocity history of one body [m/s], shape (N, 2)."""
        return self._column(index, "velocity").reshape(-1, 2)

    def acceleration(self, index: int = 0) -> NDArray[np.float64]:
        """Acceleration history of one body [m/s^2], shape (N, 2)."""
        return self._column(index, "acceleration").reshape(-1, 2)

    @classmethod
    def from_simulator(cls, sim: Simulator) -> "SimulationResult":
        """Create result from simulator history."""
        return sim.history()

    def to_dataframe(self):
        """Convert to Polars DataFrame, one row per body per snapshot."""
        import polars as pl

        rows = []
        for snapshot in self.snapshots:
            for body in snapshot.bodies:
                rows.append({"frame": snapshot.frame, "time": snapshot.time, **body.to_dict()})

        return pl.DataFrame(rows)
