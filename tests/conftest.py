from __future__ import annotations

import os

os.environ.setdefault("HORIZONVIEW_MPL_BACKEND", "Agg")

import numpy as np  # noqa: E402
import pytest  # noqa: E402

SHADER_TEMPLATE = """\
const int NSTEPS = {{n_steps}};
{{#planetEnabled}}#define PLANET{{/planetEnabled}}
{{#observerMotion}}uniform vec3 cam_vel;{{/observerMotion}}
{{^observerMotion}}const vec3 cam_vel = vec3(0.0);{{/observerMotion}}
{{#light_travel_time}}#define LIGHT_TRAVEL_TIME{{/light_travel_time}}
{{#lorentz_contraction}}#define LORENTZ_CONTRACTION{{/lorentz_contraction}}
{{#gravitational_time_dilation}}#define GRAVITATIONAL_TIME_DILATION{{/gravitational_time_dilation}}
{{#doppler_shift}}#define DOPPLER_SHIFT{{/doppler_shift}}
{{#aberration}}#define ABERRATION{{/aberration}}
{{#beaming}}#define BEAMING{{/beaming}}
{{#accretion_disk}}#define ACCRETION_DISK{{/accretion_disk}}
"""


@pytest.fixture
def shader_template() -> str:
    return SHADER_TEMPLATE


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(20240611)
