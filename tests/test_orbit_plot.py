from __future__ import annotations

import numpy as np
import pytest

from horizonview.simulation import SimulationContext
from horizonview.viz.orbit_plot import OrbitPlotter, OrbitSample


def test_sample_from_uniforms():
    uniforms = {
        "time": 1.5,
        "cam_pos": np.array([1.0, 2.0, 3.0]),
        "cam_x": np.array([1.0, 0.0, 0.0]),
        "cam_y": np.array([0.0, 1.0, 0.0]),
        "cam_z": np.array([0.0, 0.0, 1.0]),
    }
    sample = OrbitSample.from_uniforms(2.0, uniforms)
    assert sample.coordinate_time == 2.0
    assert sample.proper_time == 1.5
    np.testing.assert_array_equal(sample.cam_axes, np.eye(3))


def test_plot_and_save(shader_template, tmp_path):
    ctx = SimulationContext(shader_template)
    samples = []
    t = 0.0
    for _ in range(40):
        update = ctx.step(0.5)
        t += 0.5
        samples.append(OrbitSample.from_uniforms(t, update.uniforms))

    plotter = OrbitPlotter()
    plotter.plot(samples)
    out = tmp_path / "orbit.png"
    plotter.save(str(out), dpi=50)
    plotter.close()
    assert out.stat().st_size > 0


def test_plot_requires_samples():
    plotter = OrbitPlotter()
    with pytest.raises(ValueError, match="empty"):
        plotter.plot([])
    plotter.close()
