from __future__ import annotations

import logging

import numpy as np
from tqdm import tqdm

from horizonview.camera.frame import initial_view_inverse
from horizonview.math_utils import homogeneous, rotation_y
from horizonview.simulation import SimulationConfig, SimulationContext, configure_logging
from horizonview.viz.orbit_plot import OrbitPlotter, OrbitSample

# ============================================================
# TOP-LEVEL RUN SETTINGS (edit these)
# ============================================================
FRAMES_N = 600
FRAME_SECONDS = 1.0 / 60.0
TIME_SCALE = 20.0

OBSERVER_DISTANCE = 11.0
ORBITAL_INCLINATION_DEG = -10.0
QUALITY = "medium"

# Slow yaw of the raw camera, degrees per frame
CAMERA_YAW_PER_FRAME = 0.05

OUTPUT_PNG = "orbit.png"

# Trimmed-down shader template with the same markers as the real ray tracer
SHADER_TEMPLATE = """\
#define N_STEPS {{n_steps}}
uniform vec3 cam_pos, cam_x, cam_y, cam_z, cam_vel;
uniform float time;

vec3 trace(vec3 pos, vec3 ray) {
    vec3 color = vec3(0.0);
    for (int j = 0; j < N_STEPS; j++) {
        {{#light_travel_time}}float t = time - float(j);{{/light_travel_time}}
        {{^light_travel_time}}float t = time;{{/light_travel_time}}
        {{#planetEnabled}}color += planet_intersection(pos, ray, t);{{/planetEnabled}}
        {{#accretion_disk}}color += disk_emission(pos, ray);{{/accretion_disk}}
    }
    return color;
}

void main() {
    vec3 ray = view_ray();
    {{#observerMotion}}
    {{#aberration}}ray = aberrate(ray, cam_vel);{{/aberration}}
    {{/observerMotion}}
    vec3 color = trace(cam_pos, ray);
    {{#doppler_shift}}color = doppler(color);{{/doppler_shift}}
    {{#beaming}}color = beam(color);{{/beaming}}
    gl_FragColor = vec4(color, 1.0);
}
"""


def main() -> None:
    config = SimulationConfig.from_env()
    configure_logging(config.log_level)
    logger = logging.getLogger("demo_orbit")

    ctx = SimulationContext(SHADER_TEMPLATE, config=config)
    ctx.commands.put("time_scale", TIME_SCALE)
    ctx.commands.put("quality", QUALITY)
    ctx.commands.put("observer.distance", OBSERVER_DISTANCE)
    ctx.commands.put("observer.orbital_inclination", ORBITAL_INCLINATION_DEG)

    base_view = initial_view_inverse(np)
    samples: list[OrbitSample] = []
    coordinate_time = 0.0

    for i in tqdm(range(FRAMES_N), desc="simulating"):
        view = base_view @ homogeneous(np, rotation_y(np, CAMERA_YAW_PER_FRAME * i))
        update = ctx.step(FRAME_SECONDS, view)
        if update is None:
            continue

        if update.program is not None:
            logger.info("program recompiled (%d chars)", len(update.program))

        coordinate_time += FRAME_SECONDS * ctx.parameters.time_scale
        samples.append(OrbitSample.from_uniforms(coordinate_time, update.uniforms))

    last = samples[-1]
    print(f"coordinate time: {last.coordinate_time:.3f}")
    print(f"proper time:     {last.proper_time:.3f}")
    print(f"ratio:           {last.proper_time / last.coordinate_time:.6f}")

    plotter = OrbitPlotter()
    plotter.plot(samples)
    plotter.save(OUTPUT_PNG)
    plotter.show()


if __name__ == "__main__":
    main()
