from __future__ import annotations

import math

import numpy as np
import pytest

from horizonview.errors import DomainError
from horizonview.observer import ObserverState, OrbitalMotionIntegrator, circular_orbit_speed, dilated_time_step
from horizonview.shader.parameters import ShaderParameters


@pytest.fixture
def integrator() -> OrbitalMotionIntegrator:
    return OrbitalMotionIntegrator(np)


@pytest.mark.parametrize("r", [1.0001, 1.5, 2.0, 3.7, 11.0, 250.0])
def test_circular_orbit_speed(r):
    v = circular_orbit_speed(r)
    assert v == 1.0 / math.sqrt(2.0 * (r - 1.0))
    assert (v / r) * r == pytest.approx(v, rel=1e-15)


@pytest.mark.parametrize("r", [1.0, 0.5, 0.0, -4.0, float("nan")])
def test_circular_orbit_speed_inside_horizon(r):
    with pytest.raises(DomainError):
        circular_orbit_speed(r)


def test_dilated_time_step_formula(rng):
    for _ in range(200):
        dt = float(rng.uniform(0.0, 2.0))
        v = float(rng.uniform(0.0, 0.999))
        r = float(rng.uniform(1.001, 60.0))
        expected = dt * math.sqrt((1.0 - v * v) / (1.0 - 1.0 / r))
        assert dilated_time_step(dt, v, r) == pytest.approx(expected, rel=1e-12)


def test_dilated_time_step_can_exceed_coordinate_step():
    # slow observer close to the horizon: the gravitational factor dominates
    assert dilated_time_step(1.0, 0.1, 1.1) > 1.0
    # fast observer far away: the kinematic factor dominates
    assert dilated_time_step(1.0, 0.9, 100.0) < 1.0


def test_dilated_time_step_diverges_near_horizon():
    steps = [dilated_time_step(1.0, 0.0, 1.0 + eps) for eps in (1e-1, 1e-3, 1e-6, 1e-9)]
    assert steps == sorted(steps)
    assert steps[-1] > 1e4


@pytest.mark.parametrize(("v", "r"), [(0.5, 1.0), (0.5, 0.3), (1.0, 5.0), (1.2, 5.0)])
def test_dilated_time_step_domain(v, r):
    with pytest.raises(DomainError):
        dilated_time_step(1.0, v, r)


def test_inclined_orbit_at_zero_phase(integrator):
    params = ShaderParameters()
    params.gravitational_time_dilation = False
    params.observer.distance = 11.0
    params.observer.orbital_inclination = -10.0
    state = ObserverState.create(np)

    integrator.advance(state, 0.25, params)

    v = 1.0 / math.sqrt(20.0)
    a = math.radians(10.0)
    np.testing.assert_allclose(state.position, [11.0 * math.cos(a), 0.0, 11.0 * math.sin(a)], atol=1e-12)
    np.testing.assert_allclose(state.velocity, [0.0, v, 0.0], atol=1e-12)
    assert state.proper_time == pytest.approx(0.25)


def test_orbit_phase_uses_proper_time_before_update(integrator):
    params = ShaderParameters()
    params.observer.orbital_inclination = 0.0
    state = ObserverState.create(np)
    state.proper_time = 3.0

    dtau = integrator.advance(state, 0.5, params)

    r = params.observer.distance
    v = circular_orbit_speed(r)
    angle = 3.0 * v / r
    np.testing.assert_allclose(state.position, [r * math.cos(angle), r * math.sin(angle), 0.0], atol=1e-12)
    np.testing.assert_allclose(state.velocity, [-v * math.sin(angle), v * math.cos(angle), 0.0], atol=1e-12)
    assert dtau == pytest.approx(0.5 * math.sqrt((1.0 - v * v) / (1.0 - 1.0 / r)))
    assert state.proper_time == pytest.approx(3.0 + dtau)


def test_orbit_keeps_radius_and_subluminal_speed(integrator, rng):
    params = ShaderParameters()
    state = ObserverState.create(np)
    for _ in range(100):
        params.observer.distance = float(rng.uniform(1.6, 40.0))
        params.observer.orbital_inclination = float(rng.uniform(-90.0, 90.0))
        before = state.proper_time
        integrator.advance(state, float(rng.uniform(0.0, 0.1)), params)
        assert float(np.linalg.norm(state.position)) == pytest.approx(params.observer.distance)
        assert float(np.linalg.norm(state.velocity)) < 1.0
        assert float(np.dot(state.position, state.velocity)) == pytest.approx(0.0, abs=1e-12)
        assert state.proper_time >= before


def test_free_motion_leaves_position_and_velocity(integrator):
    params = ShaderParameters()
    params.observer.motion = False
    state = ObserverState.create(np)
    state.position = np.array([0.0, 0.0, 5.0])
    state.velocity = np.array([0.1, 0.0, 0.0])

    dtau = integrator.advance(state, 0.2, params)

    np.testing.assert_array_equal(state.position, [0.0, 0.0, 5.0])
    np.testing.assert_array_equal(state.velocity, [0.1, 0.0, 0.0])
    assert dtau == pytest.approx(0.2 / math.sqrt(1.0 - 1.0 / 5.0))


def test_no_dilation_uses_scaled_step(integrator):
    params = ShaderParameters(time_scale=3.0, gravitational_time_dilation=False)
    state = ObserverState.create(np)
    assert integrator.advance(state, 0.1, params) == pytest.approx(0.3)


def test_zero_time_scale_freezes_clock(integrator):
    params = ShaderParameters(time_scale=0.0)
    state = ObserverState.create(np)
    state.proper_time = 4.0
    integrator.advance(state, 1.0, params)
    assert state.proper_time == 4.0


@pytest.mark.parametrize("distance", [1.5, 1.2, 1.0, 0.5])
def test_orbit_too_close_is_rejected_without_mutation(integrator, distance):
    params = ShaderParameters()
    params.observer.distance = distance  # bypasses control-input validation
    state = ObserverState.create(np)
    state.proper_time = 1.0
    snapshot = state.copy()

    with pytest.raises(DomainError):
        integrator.advance(state, 0.1, params)

    np.testing.assert_array_equal(state.position, snapshot.position)
    np.testing.assert_array_equal(state.velocity, snapshot.velocity)
    assert state.proper_time == snapshot.proper_time


@pytest.mark.parametrize("dilation", [True, False])
def test_free_observer_inside_horizon_is_rejected(integrator, dilation):
    params = ShaderParameters(gravitational_time_dilation=dilation)
    params.observer.motion = False
    state = ObserverState.create(np)
    state.position = np.array([0.5, 0.0, 0.0])
    with pytest.raises(DomainError) as info:
        integrator.advance(state, 0.1, params)
    assert info.value.radius == pytest.approx(0.5)
    assert state.proper_time == 0.0


def test_negative_elapsed_time_is_rejected(integrator):
    with pytest.raises(DomainError):
        integrator.advance(ObserverState.create(np), -0.01, ShaderParameters())


def test_initial_state():
    state = ObserverState.create(np)
    np.testing.assert_array_equal(state.position, [10.0, 0.0, 0.0])
    assert state.velocity[0] == 0.0
    assert state.velocity[2] == 0.0
    assert 0.0 < state.velocity[1] < 1.0
    np.testing.assert_array_equal(state.orientation, np.eye(3))
    assert state.proper_time == 0.0
