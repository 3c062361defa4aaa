from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from horizonview.errors import ParameterError

ENV_PREFIX = "HORIZONVIEW_"

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    """Process-level settings of the simulation core.

    Fields:
      use_cuda:
        Keep observer vectors on the GPU through CuPy when it is installed.
      camera_eps:
        Frobenius distance between consecutive inverse view matrices above which the
        camera counts as moved and a frame is produced.
      log_level:
        Level name passed to :func:`configure_logging` by scripts.
    """

    use_cuda: bool = False
    camera_eps: float = 1e-10
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SimulationConfig:
        """Read ``HORIZONVIEW_USE_CUDA``, ``HORIZONVIEW_CAMERA_EPS`` and ``HORIZONVIEW_LOG_LEVEL``."""
        env = os.environ if environ is None else environ
        defaults = cls()

        use_cuda = defaults.use_cuda
        raw = env.get(ENV_PREFIX + "USE_CUDA")
        if raw is not None:
            flag = raw.strip().lower()
            if flag not in _TRUE | _FALSE:
                msg = f"{ENV_PREFIX}USE_CUDA must be a boolean, got {raw!r}"
                raise ParameterError(msg)
            use_cuda = flag in _TRUE

        camera_eps = defaults.camera_eps
        raw = env.get(ENV_PREFIX + "CAMERA_EPS")
        if raw is not None:
            try:
                camera_eps = float(raw)
            except ValueError:
                msg = f"{ENV_PREFIX}CAMERA_EPS must be a number, got {raw!r}"
                raise ParameterError(msg) from None
            if camera_eps < 0.0:
                msg = f"{ENV_PREFIX}CAMERA_EPS must be >= 0, got {camera_eps}"
                raise ParameterError(msg)

        log_level = env.get(ENV_PREFIX + "LOG_LEVEL", defaults.log_level).strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            msg = f"{ENV_PREFIX}LOG_LEVEL is not a logging level: {log_level!r}"
            raise ParameterError(msg)

        return cls(use_cuda=use_cuda, camera_eps=camera_eps, log_level=log_level)


def configure_logging(level: str | int = "WARNING") -> None:
    """Root logging setup for scripts. The library never installs handlers itself."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
