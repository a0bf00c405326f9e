"""Exception taxonomy for orbitsim.

DomainError covers physically meaningless inputs discovered at construction
or while stepping (non-positive mass, a body sitting on the reference frame's
center). ConfigurationError covers bad constants supplied at setup.
"""


class OrbitSimError(Exception):
    """Base class for all orbitsim errors."""


class DomainError(OrbitSimError, ValueError):
    """Input outside the domain of the equations of motion."""


class ZeroOrNegativeMassError(DomainError):
    """Body mass is zero, negative or not finite."""


class ZeroSeparationError(DomainError):
    """Body coincides with the reference frame's center (r == 0)."""


class ConfigurationError(OrbitSimError, ValueError):
    """Invalid physical constant or simulation setting."""


class SimulationHaltedError(OrbitSimError, RuntimeError):
    """Simulator was stepped after a failure without being reset."""
