from __future__ import annotations

import logging
from typing import Any

import numpy as np

try:
    import cupy as cp  # type: ignore
except ImportError:  # pragma: no cover
    cp = None

logger = logging.getLogger(__name__)

ArrayModule = Any


def get_array_module(use_cuda: bool) -> ArrayModule:
    """Array module holding the observer vectors: cupy when requested and installed, else numpy."""
    if not use_cuda:
        return np
    if cp is None:
        logger.warning("CUDA requested but CuPy is not installed; observer state stays on NumPy")
        return np
    return cp


def to_numpy(xp: ArrayModule, a: Any) -> np.ndarray:
    """Host-side copy of an xp array, for render parameter upload and matplotlib."""
    if cp is not None and xp is cp:
        return cp.asnumpy(a)  # type: ignore[union-attr]
    return np.asarray(a)


def vector3(xp: ArrayModule, x: float, y: float, z: float) -> Any:
    """Build a float64 3-vector in the given backend."""
    return xp.asarray([x, y, z], dtype=xp.float64)
