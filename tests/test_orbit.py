import logging
import math

import pytest
from pytest import approx

from spcsviz.coordinates import point_on_sphere
from spcsviz.orbit import (
    OrbitInterpolator, OrbitStatus, camera_position, ease_out_cubic, latitude_to_phi,
    longitude_to_theta, shortest_angle_delta
)
from tests.functions import FakeClock, assert_points_close


def test_shortest_angle_delta():
    assert shortest_angle_delta(0., 1.) == approx(1.)
    assert shortest_angle_delta(math.radians(170), math.radians(-170)) == approx(math.radians(20))
    assert shortest_angle_delta(math.radians(-170), math.radians(170)) == approx(math.radians(-20))
    assert shortest_angle_delta(0., 3 * math.pi) == approx(math.pi)
    assert shortest_angle_delta(0., -5 * math.pi / 2) == approx(-math.pi / 2)


def test_ease_out_cubic():
    assert ease_out_cubic(0.) == 0.
    assert ease_out_cubic(0.5) == approx(0.875)
    assert ease_out_cubic(1.) == 1.


def test_angle_conversions():
    assert latitude_to_phi(90.) == approx(0.)
    assert latitude_to_phi(0.) == approx(math.pi / 2)
    assert latitude_to_phi(-90.) == approx(math.pi)
    assert longitude_to_theta(180.) == approx(math.pi)
    assert longitude_to_theta(-90.) == approx(-math.pi / 2)


def test_camera_position():
    assert_points_close(camera_position(0., math.pi / 2, 10.), (0., 0., 10.))
    assert_points_close(camera_position(0., 0., 10.), (0., 10., 0.))

    # Looking down at a lat/lon from above it
    assert_points_close(
        camera_position(longitude_to_theta(-85.8333), latitude_to_phi(30.5), 3.),
        point_on_sphere(30.5, -85.8333, 3.)
    )


def test_orbit_run_samples():
    clock = FakeClock()
    interpolator = OrbitInterpolator(clock=clock)
    assert interpolator.status is OrbitStatus.IDLE

    run = interpolator.start(0., math.pi / 2, 1., 0.5, duration_ms=1000)
    assert interpolator.status is OrbitStatus.RUNNING
    assert run.generation == interpolator.generation == 1

    first = run.tick(0.)
    assert first.progress == 0.
    assert first.theta == 0.
    assert first.phi == approx(math.pi / 2)

    # Timestamps that don't advance are ignored
    assert run.tick(0.) is None
    assert run.tick(-5.) is None

    mid = run.tick(500.)
    assert mid.progress == approx(0.5)
    assert mid.theta == approx(0.875)
    assert mid.phi == approx(math.pi / 2 + (0.5 - math.pi / 2) * 0.875)
    assert (interpolator.theta, interpolator.phi) == (mid.theta, mid.phi)

    last = run.tick(1200.)
    assert last.is_final
    assert (last.theta, last.phi) == (1., 0.5)
    assert run.finished
    assert interpolator.status is OrbitStatus.IDLE
    assert (interpolator.theta, interpolator.phi) == (1., 0.5)

    assert run.tick(1300.) is None


def test_orbit_wraps_short_way():
    clock = FakeClock()
    interpolator = OrbitInterpolator(theta=math.radians(170), clock=clock)
    run = interpolator.orbit_to(0., -170., duration_ms=1000)

    # Halfway (in time) the camera is east of the antimeridian, not back over 0°
    sample = run.tick(500.)
    assert sample.theta == approx(math.radians(170 + 20 * 0.875))

    sample = run.tick(1000.)
    assert sample.theta == approx(math.radians(-170))
    assert sample.phi == approx(math.pi / 2)


def test_orbit_iteration():
    clock = FakeClock(step=250.)
    interpolator = OrbitInterpolator(clock=clock)
    run = interpolator.orbit_to(30.5, -85.8333)
    assert run.start_ms == 0.

    samples = list(run)
    assert [s.progress for s in samples] == approx([0.25, 0.5, 0.75, 1.])
    assert samples[-1].is_final
    assert samples[-1].theta == approx(math.radians(-85.8333))
    assert samples[-1].phi == approx(math.radians(90 - 30.5))

    # Eased samples approach the target monotonically
    thetas = [s.theta for s in samples]
    assert thetas == sorted(thetas, reverse=True)


def test_orbit_superseded(caplog):
    caplog.set_level(logging.DEBUG, logger='spcsviz')
    clock = FakeClock()
    interpolator = OrbitInterpolator(clock=clock)

    first = interpolator.orbit_to(45., 90.)
    clock.advance(100.)
    assert first.tick(clock.now) is not None

    second = interpolator.orbit_to(-45., -90.)
    assert interpolator.generation == 2
    assert first.superseded
    assert not second.superseded

    # The stale run stops without emitting or moving the camera
    theta, phi = interpolator.theta, interpolator.phi
    assert first.tick(clock.now + 50.) is None
    assert first.finished
    assert (interpolator.theta, interpolator.phi) == (theta, phi)
    assert 'Orbit generation 1 superseded by 2' in caplog.text

    assert interpolator.status is OrbitStatus.RUNNING
    final = second.tick(clock.now + 1000.)
    assert final.is_final
    assert interpolator.theta == approx(math.radians(-90.))
    assert interpolator.phi == approx(math.radians(135.))


def test_orbit_sample_at():
    interpolator = OrbitInterpolator(clock=FakeClock())
    run = interpolator.start(0., 1., 2., 1.5, duration_ms=100)

    assert run.sample_at(-10.).progress == 0.
    assert run.sample_at(50.).theta == approx(2. * 0.875)
    assert run.sample_at(500.).theta == 2.

    # sample_at doesn't advance the run
    assert not run.finished
    assert interpolator.theta == 0.


def test_orbit_invalid_duration():
    interpolator = OrbitInterpolator(clock=FakeClock())
    with pytest.raises(ValueError):
        interpolator.orbit_to(0., 0., duration_ms=0)

    with pytest.raises(ValueError):
        interpolator.start(0., 0., 1., 1., duration_ms=-100)

    assert interpolator.generation == 0


def test_orbit_default_clock():
    interpolator = OrbitInterpolator()
    run = interpolator.orbit_to(0., 10., duration_ms=1)
    samples = list(run)
    assert samples[-1].is_final
    assert repr(interpolator).startswith('<OrbitInterpolator(idle')


def test_orbit_equator_quarter_turn():
    interpolator = OrbitInterpolator(clock=FakeClock(step=100.))
    samples = list(interpolator.start(0., math.pi / 2, math.pi / 2, math.pi / 2))

    thetas = [s.theta for s in samples]
    assert thetas == sorted(thetas)
    assert thetas[-1] == math.pi / 2
    assert all(s.phi == approx(math.pi / 2) for s in samples)


def test_orbit_zero_length_arc():
    interpolator = OrbitInterpolator(clock=FakeClock(step=600.))
    samples = list(interpolator.start(1., 1., 1., 1.))
    assert samples[-1].is_final
    assert (samples[-1].theta, samples[-1].phi) == (1., 1.)
    assert all(s.theta == 1. for s in samples)


def test_orbit_run_clock_override():
    interpolator = OrbitInterpolator(clock=FakeClock(start=5000.))
    run = interpolator.start(0., 0., 1., 1., duration_ms=100, clock=FakeClock(step=50.))
    assert run.start_ms == 0.
    assert [s.progress for s in run] == approx([0.5, 1.])
