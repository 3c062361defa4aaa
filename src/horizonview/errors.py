from __future__ import annotations


class HorizonViewError(Exception):
    """Base class for errors raised by horizonview."""


class DomainError(HorizonViewError, ValueError):
    """Observer kinematics evaluated at or inside the unit gravitational radius.

    Raised before any state is mutated, so the caller can keep the last valid state
    and clamp its control inputs.
    """

    def __init__(self, msg: str, radius: float | None = None) -> None:
        super().__init__(msg)
        self.radius = radius


class FrameDegeneracyError(HorizonViewError, ValueError):
    """Orbital frame requested from zero-length or parallel vectors."""


class ParameterError(HorizonViewError, ValueError):
    """Control input rejected before it reaches a simulation step."""
