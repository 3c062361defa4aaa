from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Mapping

from horizonview.errors import ParameterError

Quality = Literal["fast", "medium", "high"]

# Ray-marching step count per quality tier. Every reader of n_steps goes through here.
QUALITY_STEPS: Mapping[str, int] = MappingProxyType({"fast": 40, "medium": 100, "high": 200})

SCHEMA_VERSION = 1

# Circular orbits at or inside r = 1.5 would need light speed.
MIN_OBSERVER_DISTANCE = 1.5

# Fields whose change requires recompiling the program text.
COMPILE_TIME_PATHS = frozenset(
    {
        "quality",
        "accretion_disk",
        "lorentz_contraction",
        "gravitational_time_dilation",
        "aberration",
        "beaming",
        "doppler_shift",
        "light_travel_time",
        "planet.enabled",
        "observer.motion",
    },
)


def steps_for_quality(quality: str) -> int:
    """Return the ray-marching step count for a quality tier."""
    try:
        return QUALITY_STEPS[quality]
    except KeyError:
        msg = f"unknown quality {quality!r}, expected one of {sorted(QUALITY_STEPS)}"
        raise ParameterError(msg) from None


@dataclass(slots=True)
class PlanetParameters:
    enabled: bool = True
    distance: float = 7.0
    radius: float = 0.4


@dataclass(slots=True)
class ObserverParameters:
    """Observer placement.

    Attributes
    ----------
    motion:
        True puts the observer on a circular orbit, False lets the camera controls place it.
    distance:
        Orbital (or camera) radius in units of the gravitational radius.
    orbital_inclination:
        Tilt of the orbital plane about +Y, in degrees.

    """

    motion: bool = True
    distance: float = 11.0
    orbital_inclination: float = -10.0


@dataclass(slots=True)
class ShaderParameters:
    """Feature flags and numeric knobs shared by the integrator and the shader compiler.

    ``n_steps`` is derived from ``quality`` and cannot be assigned.
    """

    quality: Quality = "medium"
    accretion_disk: bool = True
    lorentz_contraction: bool = True
    gravitational_time_dilation: bool = True
    aberration: bool = True
    beaming: bool = True
    doppler_shift: bool = True
    light_travel_time: bool = True
    time_scale: float = 1.0
    planet: PlanetParameters = field(default_factory=PlanetParameters)
    observer: ObserverParameters = field(default_factory=ObserverParameters)

    @property
    def n_steps(self) -> int:
        return steps_for_quality(self.quality)

    def has_moving_parts(self) -> bool:
        return self.planet.enabled or self.observer.motion

    def get(self, path: str) -> Any:
        """Read a dotted parameter path such as ``planet.radius``."""
        target, name = self._resolve(path)
        return getattr(target, name)

    def set(self, path: str, value: Any) -> None:
        """Validate and assign a dotted parameter path."""
        target, name = self._resolve(path)
        setattr(target, name, validate_value(path, value))

    def _resolve(self, path: str) -> tuple[Any, str]:
        if path not in PARAMETER_PATHS:
            msg = f"unknown parameter {path!r}"
            raise ParameterError(msg)
        head, _, tail = path.partition(".")
        if tail:
            return getattr(self, head), tail
        return self, head

    def to_dict(self) -> dict[str, Any]:
        """Plain snapshot for control surfaces, including the derived step count."""
        return {
            "version": SCHEMA_VERSION,
            "quality": self.quality,
            "n_steps": self.n_steps,
            "accretion_disk": self.accretion_disk,
            "lorentz_contraction": self.lorentz_contraction,
            "gravitational_time_dilation": self.gravitational_time_dilation,
            "aberration": self.aberration,
            "beaming": self.beaming,
            "doppler_shift": self.doppler_shift,
            "light_travel_time": self.light_travel_time,
            "time_scale": self.time_scale,
            "planet": {
                "enabled": self.planet.enabled,
                "distance": self.planet.distance,
                "radius": self.planet.radius,
            },
            "observer": {
                "motion": self.observer.motion,
                "distance": self.observer.distance,
                "orbital_inclination": self.observer.orbital_inclination,
            },
        }


_BOOL_PATHS = frozenset(COMPILE_TIME_PATHS - {"quality"})
_FLOAT_PATHS = frozenset(
    {"time_scale", "planet.distance", "planet.radius", "observer.distance", "observer.orbital_inclination"},
)
PARAMETER_PATHS = _BOOL_PATHS | _FLOAT_PATHS | {"quality"}


def validate_value(path: str, value: Any) -> Any:
    """Return the normalized value for path, or raise ParameterError."""
    if path not in PARAMETER_PATHS:
        msg = f"unknown parameter {path!r}"
        raise ParameterError(msg)

    if path == "quality":
        if not isinstance(value, str):
            msg = f"quality expects a string, got {value!r}"
            raise ParameterError(msg)
        steps_for_quality(value)
        return value

    if path in _BOOL_PATHS:
        if not isinstance(value, bool):
            msg = f"{path} expects a bool, got {value!r}"
            raise ParameterError(msg)
        return value

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = f"{path} expects a number, got {value!r}"
        raise ParameterError(msg)
    x = float(value)
    if not math.isfinite(x):
        msg = f"{path} must be finite, got {value!r}"
        raise ParameterError(msg)

    if path == "time_scale" and x < 0.0:
        msg = f"time_scale must be >= 0, got {x}"
        raise ParameterError(msg)
    if path == "observer.distance" and x <= MIN_OBSERVER_DISTANCE:
        msg = f"observer.distance must be > {MIN_OBSERVER_DISTANCE} (timelike circular orbit), got {x}"
        raise ParameterError(msg)
    if path in ("planet.distance", "planet.radius") and x <= 0.0:
        msg = f"{path} must be > 0, got {x}"
        raise ParameterError(msg)
    return x
