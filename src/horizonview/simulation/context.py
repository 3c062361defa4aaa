from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np

from horizonview.backend import get_array_module, to_numpy
from horizonview.camera.frame import FrameBuilder, initial_view_inverse
from horizonview.errors import FrameDegeneracyError
from horizonview.math_utils import frobenius_distance
from horizonview.observer.orbit import OrbitalMotionIntegrator
from horizonview.observer.state import ObserverState
from horizonview.shader.compiler import ShaderProgram, ShaderTemplateCompiler
from horizonview.shader.parameters import ShaderParameters
from horizonview.simulation.commands import ParameterQueue
from horizonview.simulation.config import SimulationConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FrameUpdate:
    """Everything the rendering host needs after one step.

    Attributes
    ----------
    uniforms:
        Render parameters by uniform name, as NumPy arrays or floats.
    program:
        New program text if it was recompiled in this step, else None.
    proper_time_step:
        Proper time added to the observer clock.

    """

    uniforms: dict[str, Any]
    program: str | None
    proper_time_step: float


class SimulationContext:
    """Observer state, shader parameters and compiled-program cache of one session.

    Input handlers never touch ``parameters`` directly; they go through ``commands``
    (or ``toggle_pause``), and :meth:`step` applies queued changes at the start of
    each frame.
    """

    def __init__(
            self,
            template_text: str,
            parameters: ShaderParameters | None = None,
            config: SimulationConfig | None = None,
            state: ObserverState | None = None,
    ) -> None:
        self.config = config or SimulationConfig()
        self.xp = get_array_module(self.config.use_cuda)
        self.parameters = parameters or ShaderParameters()
        self.state = state or ObserverState.create(self.xp)
        self.program = ShaderProgram(ShaderTemplateCompiler(template_text))
        self.commands = ParameterQueue()
        self.integrator = OrbitalMotionIntegrator(self.xp)
        self.frames = FrameBuilder(self.xp)

        self.paused = False
        self._resume_time_scale = self.parameters.time_scale
        self._last_view: Any = None

    def toggle_pause(self) -> bool:
        """Freeze or resume proper time. Returns the new paused state."""
        if self.paused:
            self.commands.put("time_scale", self._resume_time_scale or 1.0)
        else:
            current = self.parameters.time_scale
            self._resume_time_scale = self.commands.pending_value("time_scale", current)
            self.commands.put("time_scale", 0.0)
        self.paused = not self.paused
        return self.paused

    def camera_moved(self, view_inverse: Any) -> bool:
        if self._last_view is None:
            return True
        return frobenius_distance(self.xp, view_inverse, self._last_view) > self.config.camera_eps

    def step(self, elapsed_seconds: float, view_inverse: Any | None = None) -> FrameUpdate | None:
        """Run one simulation step.

        Order: queued parameter changes, orbital motion, camera basis, render parameters,
        and a recompile only if a compile-time flag changed. Returns None when nothing
        moved and nothing changed, in which case no state is mutated.

        Raises:
            DomainError: the observer would be at or inside the horizon; the observer
                state is left as it was.
        """
        xp = self.xp
        changes = self.commands.apply(self.parameters)
        if changes.recompile:
            self.program.invalidate()

        if view_inverse is None:
            view_inverse = self._last_view if self._last_view is not None else initial_view_inverse(xp)
        view = xp.asarray(view_inverse, dtype=xp.float64)

        if not (
                changes
                or self.program.needs_update
                or self.parameters.has_moving_parts()
                or self.camera_moved(view)
        ):
            return None

        dtau = self.integrator.advance(self.state, elapsed_seconds, self.parameters)
        self._update_camera(view)
        self._last_view = view.copy()

        return FrameUpdate(
            uniforms=self.uniforms(),
            program=self.program.refresh(self.parameters),
            proper_time_step=dtau,
        )

    def _update_camera(self, view: Any) -> None:
        try:
            self.frames.update_camera(self.state, view, self.parameters.observer)
        except FrameDegeneracyError as exc:
            logger.warning("keeping previous camera orientation: %s", exc)

    def uniforms(self) -> dict[str, Any]:
        """Snapshot of the render parameters taken from the current state."""
        xp = self.xp
        state = self.state

        def vec(a: Any) -> np.ndarray:
            return np.array(to_numpy(xp, a), dtype=np.float64)

        return {
            "time": float(state.proper_time),
            "cam_pos": vec(state.position),
            "cam_vel": vec(state.velocity),
            "cam_x": vec(state.camera_x),
            "cam_y": vec(state.camera_y),
            "cam_z": vec(state.camera_z),
            "planet_distance": float(self.parameters.planet.distance),
            "planet_radius": float(self.parameters.planet.radius),
        }

    def program_text(self) -> str:
        """Current program text, compiling it first if stale."""
        return self.program.current(self.parameters)
