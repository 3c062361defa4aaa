from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import matplotlib as mpl
import numpy as np

# IMPORTANT: set backend before importing pyplot
_BACKEND = os.environ.get("HORIZONVIEW_MPL_BACKEND", "").strip()
if _BACKEND:
    mpl.use(_BACKEND, force=True)
else:
    for candidate in ("TkAgg", "QtAgg", "Agg"):
        # noinspection PyBroadException
        try:
            mpl.use(candidate, force=True)
            break
        except Exception:  # pragma: no cover  # noqa: BLE001, S112
            continue

import matplotlib.pyplot as plt  # noqa: E402

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True, slots=True)
class OrbitSample:
    """One recorded simulation frame.

    Attributes
    ----------
    coordinate_time:
        Wall-clock time scaled by ``time_scale``, summed over frames.
    proper_time:
        Observer clock after the frame.
    cam_pos:
        Observer position (3,).
    cam_axes:
        Camera basis (3, 3) with the x, y, z axes as columns.

    """

    coordinate_time: float
    proper_time: float
    cam_pos: np.ndarray
    cam_axes: np.ndarray

    @classmethod
    def from_uniforms(cls, coordinate_time: float, uniforms: dict[str, Any]) -> OrbitSample:
        axes = np.stack([uniforms["cam_x"], uniforms["cam_y"], uniforms["cam_z"]], axis=1)
        return cls(
            coordinate_time=float(coordinate_time),
            proper_time=float(uniforms["time"]),
            cam_pos=np.asarray(uniforms["cam_pos"], dtype=np.float64),
            cam_axes=axes,
        )


class OrbitPlotter:
    """Observer trajectory with its camera basis, next to proper vs coordinate time."""

    def __init__(self) -> None:
        """Initialize the figure."""
        self.fig = plt.figure(figsize=(12, 5))
        self.ax_orbit = self.fig.add_subplot(1, 2, 1, projection="3d")
        self.ax_time = self.fig.add_subplot(1, 2, 2)

        self.ax_orbit.set_title("Observer orbit")
        self.ax_orbit.set_xlabel("x")
        self.ax_orbit.set_ylabel("y")
        self.ax_orbit.set_zlabel("z")

        self.ax_time.set_title("Observer clock")
        self.ax_time.set_xlabel("coordinate time")
        self.ax_time.set_ylabel("proper time")

    def _draw_horizon(self, radius: float = 1.0) -> None:
        u = np.linspace(0.0, 2.0 * np.pi, 32)
        v = np.linspace(0.0, np.pi, 16)
        x = radius * np.outer(np.cos(u), np.sin(v))
        y = radius * np.outer(np.sin(u), np.sin(v))
        z = radius * np.outer(np.ones_like(u), np.cos(v))
        self.ax_orbit.plot_wireframe(x, y, z, linewidth=0.4, color="k")

    def plot(self, samples: Sequence[OrbitSample], axis_length: float = 2.0) -> None:
        if not samples:
            msg = "samples is empty"
            raise ValueError(msg)

        self._draw_horizon()

        path = np.stack([s.cam_pos for s in samples])
        self.ax_orbit.plot(path[:, 0], path[:, 1], path[:, 2], linewidth=1.5, label="observer")

        # Camera basis at the last sample
        last = samples[-1]
        for i, color in enumerate(("r", "g", "b")):
            axis = last.cam_axes[:, i] * axis_length
            self.ax_orbit.quiver(*last.cam_pos, *axis, color=color)

        extent = float(np.max(np.abs(path))) * 1.1
        self.ax_orbit.set_xlim(-extent, extent)
        self.ax_orbit.set_ylim(-extent, extent)
        self.ax_orbit.set_zlim(-extent, extent)
        self.ax_orbit.legend()

        t = np.asarray([s.coordinate_time for s in samples])
        tau = np.asarray([s.proper_time for s in samples])
        self.ax_time.plot(t, tau, label="proper time")
        self.ax_time.plot(t, t, linestyle="--", label="coordinate time")
        self.ax_time.legend()

    @staticmethod
    def show() -> None:
        plt.tight_layout()
        plt.show()

    def save(self, path: str, dpi: int = 150) -> None:
        """Save figure to disk (useful if running headless with Agg)."""
        self.fig.tight_layout()
        self.fig.savefig(path, dpi=dpi)

    def close(self) -> None:
        plt.close(self.fig)
