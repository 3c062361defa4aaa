from horizonview.observer.orbit import (
    OrbitalMotionIntegrator,
    circular_orbit_speed,
    dilated_time_step,
)
from horizonview.observer.state import ObserverState

__all__ = [
    "ObserverState",
    "OrbitalMotionIntegrator",
    "circular_orbit_speed",
    "dilated_time_step",
]
