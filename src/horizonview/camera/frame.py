from __future__ import annotations

from typing import TYPE_CHECKING, Any

from horizonview.math_utils import cross, homogeneous, normalize_strict, rotation_x, rotation_y

if TYPE_CHECKING:
    from horizonview.backend import ArrayModule
    from horizonview.observer.state import ObserverState
    from horizonview.shader.parameters import ObserverParameters


class FrameBuilder:
    """Build the world-space camera basis of the observer.

    Matrix convention: arrays are indexed ``m[row, col]`` and bases are stored as
    columns. The host supplies its 4x4 inverse view transform ``M``; the raw camera
    rotation taken from it is

        C = [M[:3, 0]; M[:3, 2]; M[:3, 1]]   (as rows)

    and the uploaded camera axes are the columns of ``ObserverState.orientation``.
    """

    # Weight of the velocity direction against the position when picking orbital_y.
    VELOCITY_WEIGHT: float = 4.0

    def __init__(self, xp: ArrayModule) -> None:
        self.xp = xp

    def orbital_frame(self, position: Any, velocity: Any) -> Any:
        """Orthonormal frame following the orbital motion.

            orbital_y = normalize(4 * normalize(velocity) - position)
            orbital_z = normalize(position x orbital_y)
            orbital_x = orbital_y x orbital_z

        Returns the 3x3 matrix with columns (orbital_x, orbital_y, orbital_z), which maps
        local orbital axes to world axes.

        Raises:
            FrameDegeneracyError: velocity is zero, or the construction collapses
                because position is zero or parallel to orbital_y.
        """
        xp = self.xp
        position = xp.asarray(position, dtype=xp.float64)
        velocity = xp.asarray(velocity, dtype=xp.float64)

        heading = normalize_strict(xp, velocity, "velocity")
        orbital_y = normalize_strict(xp, self.VELOCITY_WEIGHT * heading - position, "orbital y axis")
        orbital_z = normalize_strict(xp, cross(xp, position, orbital_y), "orbital z axis")
        orbital_x = cross(xp, orbital_y, orbital_z)

        return xp.stack([orbital_x, orbital_y, orbital_z], axis=1)

    def raw_camera_rotation(self, view_inverse: Any) -> Any:
        """Extract the camera-local rotation from the host's 4x4 inverse view matrix."""
        xp = self.xp
        m = xp.asarray(view_inverse, dtype=xp.float64)
        if m.shape != (4, 4):
            msg = f"expected a 4x4 camera transform, got shape {m.shape}"
            raise ValueError(msg)
        return xp.stack([m[:3, 0], m[:3, 2], m[:3, 1]], axis=0)

    def update_camera(self, state: ObserverState, view_inverse: Any, observer: ObserverParameters) -> None:
        """Write the final camera basis (and, without motion, the position) into state.

        With motion the orbital frame is composed with the raw camera rotation. Without
        motion the raw rotation is used directly, the observer sits at ``distance``
        behind the camera's forward axis and is at rest.

        The state is left untouched if the frame is degenerate.
        """
        xp = self.xp
        camera = self.raw_camera_rotation(view_inverse)

        if observer.motion:
            state.orientation = self.orbital_frame(state.position, state.velocity) @ camera
            return

        state.orientation = camera
        state.position = self.free_observer_position(camera, observer.distance)
        state.velocity = xp.zeros(3, dtype=xp.float64)

    @staticmethod
    def free_observer_position(camera: Any, distance: float) -> Any:
        return -camera[:, 2] * float(distance)


def initial_view_inverse(xp: ArrayModule, pitch_deg: float = 3.0, yaw_deg: float = 0.0) -> Any:
    """Startup inverse view transform: a slight pitch above the disk plane."""
    return homogeneous(xp, rotation_x(xp, -pitch_deg) @ rotation_y(xp, -yaw_deg))
