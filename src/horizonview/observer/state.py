from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from horizonview.backend import ArrayModule, vector3

DEFAULT_RADIUS = 10.0


@dataclass(slots=True)
class ObserverState:
    """Kinematic state of the observer.

    Units: the central body has unit gravitational radius and light speed is 1.

    Attributes
    ----------
    position:
        World position (3,).
    velocity:
        Coordinate velocity (3,), ``|velocity| < 1``.
    orientation:
        3x3 orthonormal camera basis; columns are the camera x, y, z axes in world space.
    proper_time:
        Time accumulated on the observer's clock.

    """

    position: Any
    velocity: Any
    orientation: Any
    proper_time: float = 0.0

    @classmethod
    def create(cls, xp: ArrayModule = np, radius: float = DEFAULT_RADIUS) -> ObserverState:
        """Start on the +X axis moving tangentially at circular-orbit speed."""
        speed = 1.0 / math.sqrt(2.0 * (radius - 1.0))
        return cls(
            position=vector3(xp, radius, 0.0, 0.0),
            velocity=vector3(xp, 0.0, speed, 0.0),
            orientation=xp.eye(3, dtype=xp.float64),
            proper_time=0.0,
        )

    @property
    def camera_x(self) -> Any:
        return self.orientation[:, 0]

    @property
    def camera_y(self) -> Any:
        return self.orientation[:, 1]

    @property
    def camera_z(self) -> Any:
        return self.orientation[:, 2]

    def copy(self) -> ObserverState:
        return ObserverState(
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            orientation=self.orientation.copy(),
            proper_time=self.proper_time,
        )
