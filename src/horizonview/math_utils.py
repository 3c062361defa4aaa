from __future__ import annotations

import math
from typing import Any

from horizonview.errors import FrameDegeneracyError


def normalize_strict(xp: Any, v: Any, what: str = "vector", eps: float = 1e-12) -> Any:
    """Normalize vector, raising FrameDegeneracyError when it has (near) zero length."""
    n = float(xp.linalg.norm(v))
    if not math.isfinite(n) or n <= eps:
        msg = f"cannot normalize {what}: length {n!r}"
        raise FrameDegeneracyError(msg)
    return v / n


def cross(xp: Any, a: Any, b: Any) -> Any:
    return xp.cross(a, b)


def rotation_y(xp: Any, angle_deg: float) -> Any:
    """3x3 rotation about +Y by angle_deg (right-handed, column-vector convention)."""
    alpha = math.radians(angle_deg)
    c, s = math.cos(alpha), math.sin(alpha)
    return xp.asarray(
        [
            [c, 0.0, s],
            [0.0, 1.0, 0.0],
            [-s, 0.0, c],
        ],
        dtype=xp.float64,
    )


def frobenius_distance(xp: Any, a: Any, b: Any) -> float:
    """Frobenius norm of a - b."""
    d = xp.asarray(a, dtype=xp.float64) - xp.asarray(b, dtype=xp.float64)
    return float(xp.sqrt(xp.sum(d * d)))


def rotation_x(xp: Any, angle_deg: float) -> Any:
    """3x3 rotation about +X by angle_deg."""
    alpha = math.radians(angle_deg)
    c, s = math.cos(alpha), math.sin(alpha)
    return xp.asarray(
        [
            [1.0, 0.0, 0.0],
            [0.0, c, -s],
            [0.0, s, c],
        ],
        dtype=xp.float64,
    )


def homogeneous(xp: Any, rotation: Any) -> Any:
    """Embed a 3x3 rotation into a 4x4 transform."""
    m = xp.eye(4, dtype=xp.float64)
    m[:3, :3] = rotation
    return m
