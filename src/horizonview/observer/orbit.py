from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from horizonview.backend import vector3
from horizonview.errors import DomainError
from horizonview.math_utils import rotation_y

if TYPE_CHECKING:
    from horizonview.backend import ArrayModule
    from horizonview.observer.state import ObserverState
    from horizonview.shader.parameters import ShaderParameters

logger = logging.getLogger(__name__)

HORIZON_RADIUS = 1.0


def _check_outside_horizon(r: float) -> None:
    if not math.isfinite(r) or r <= HORIZON_RADIUS:
        msg = f"observer radius {r!r} is at or inside the horizon (r <= {HORIZON_RADIUS})"
        raise DomainError(msg, radius=r)


def circular_orbit_speed(r: float) -> float:
    """Coordinate speed on a circular orbit of radius r.

        v = 1 / sqrt(2 (r - 1))

    Defined for r > 1; the speed reaches light speed at r = 1.5.
    """
    _check_outside_horizon(r)
    return 1.0 / math.sqrt(2.0 * (r - 1.0))


def dilated_time_step(dt: float, v: float, r: float) -> float:
    """Proper-time step for a coordinate step dt at speed v and radius r.

        dt' = sqrt(dt^2 (1 - v^2) / (1 - 1/r))

    Combines the special-relativistic factor (1 - v^2) with the Schwarzschild factor
    (1 - 1/r). The result grows without bound as r -> 1 and is not clamped.
    """
    _check_outside_horizon(r)
    if v >= 1.0:
        msg = f"speed {v!r} is not below light speed"
        raise DomainError(msg, radius=r)
    return math.sqrt((dt * dt * (1.0 - v * v)) / (1.0 - 1.0 / r))


class OrbitalMotionIntegrator:
    """Advance an ObserverState by one frame.

    With ``observer.motion`` on, position and velocity are recomputed in closed form on a
    circular orbit of radius ``observer.distance`` in the XY plane, tilted by
    ``observer.orbital_inclination`` degrees about Y. The orbital phase is taken from the
    proper time before the update. Otherwise position and velocity are left to the camera
    controls and only the radius is read.

    All checks run before the state is touched: a DomainError leaves it unchanged.
    """

    def __init__(self, xp: ArrayModule) -> None:
        self.xp = xp

    def advance(self, state: ObserverState, elapsed_seconds: float, params: ShaderParameters) -> float:
        """Integrate one step and return the proper-time increment."""
        if elapsed_seconds < 0.0:
            msg = f"elapsed time must be >= 0, got {elapsed_seconds!r}"
            raise DomainError(msg)

        xp = self.xp
        dt = elapsed_seconds * params.time_scale
        position = velocity = None

        if params.observer.motion:
            r = float(params.observer.distance)
            v = circular_orbit_speed(r)
            if v >= 1.0:
                msg = f"no timelike circular orbit at r={r} (speed {v:.6f} >= 1)"
                raise DomainError(msg, radius=r)

            ang_vel = v / r
            angle = state.proper_time * ang_vel
            s, c = math.sin(angle), math.cos(angle)

            tilt = rotation_y(xp, params.observer.orbital_inclination)
            position = tilt @ vector3(xp, c * r, s * r, 0.0)
            velocity = tilt @ vector3(xp, -s * v, c * v, 0.0)
        else:
            # camera-driven: velocity is not part of the dilation here
            r = float(xp.linalg.norm(state.position))
            v = 0.0
            _check_outside_horizon(r)

        if params.gravitational_time_dilation:
            dt = dilated_time_step(dt, v, r)

        if position is not None:
            state.position = position
            state.velocity = velocity
        state.proper_time += dt

        logger.debug("advanced observer: r=%.4f v=%.4f dtau=%.6f tau=%.6f", r, v, dt, state.proper_time)
        return dt
