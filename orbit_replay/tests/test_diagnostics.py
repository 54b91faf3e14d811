"""
Tests for orbital elements and station-keeping errors derived from state vectors.
"""
import numpy as np
import pytest

from orbit_replay import (
    DerivedElements,
    orbital_elements_from_state,
    station_keeping_error,
    circular_velocity,
)


def test_circular_orbit_elements():
    derived = orbital_elements_from_state([1.0, 0.0, 0.0], [0.0, 1.0, 0.0], mu=1.0)

    assert derived.a == pytest.approx(1.0)
    assert derived.e == pytest.approx(0.0, abs=1e-12)
    assert derived.angular_momentum == pytest.approx(1.0)
    assert derived.specific_energy == pytest.approx(-0.5)
    assert derived.is_finite()


def test_elliptical_orbit_at_periapsis():
    """At periapsis of a, e: r = a(1-e), v = sqrt(mu (1+e) / (a (1-e)))."""
    mu, a, e = 0.0002959122082855911, 1.5237, 0.0934
    rp = a * (1 - e)
    vp = np.sqrt(mu * (1 + e) / rp)

    derived = orbital_elements_from_state([0.0, rp, 0.0], [-vp, 0.0, 0.0], mu=mu)

    assert derived.a == pytest.approx(a, rel=1e-10)
    assert derived.e == pytest.approx(e, rel=1e-10)
    assert derived.angular_momentum == pytest.approx(rp * vp)


def test_zero_position_is_not_finite():
    derived = orbital_elements_from_state([0.0, 0.0, 0.0], [0.0, 1.0, 0.0])
    assert not derived.is_finite()
    assert not np.isfinite(derived.a)


@pytest.mark.parametrize("speed", [np.sqrt(2.0), 2.0, 10.0])
def test_unbound_orbit_has_no_semi_major_axis(speed):
    derived = orbital_elements_from_state([1.0, 0.0, 0.0], [0.0, speed, 0.0], mu=1.0)

    assert not np.isfinite(derived.a)
    assert not derived.is_finite()
    # Eccentricity is still meaningful for an escaping craft
    assert derived.e >= 1.0 - 1e-12


def test_is_finite_on_named_tuple():
    assert DerivedElements(1.0, 0.1, 1.0, -0.5).is_finite()
    assert not DerivedElements(np.inf, 0.1, 1.0, 0.0).is_finite()
    assert not DerivedElements(1.0, np.nan, 1.0, -0.5).is_finite()


def test_station_keeping_on_target_circle():
    v_circ = circular_velocity(1.0, mu=1.0)
    sk = station_keeping_error([1.0, 0.0, 0.0], [0.0, v_circ, 0.0], target_radius=1.0, mu=1.0)

    assert sk.radial_distance == pytest.approx(1.0)
    assert sk.position_error == pytest.approx(0.0, abs=1e-12)
    assert sk.radial_velocity == pytest.approx(0.0, abs=1e-12)
    assert sk.tangential_velocity == pytest.approx(1.0)
    assert sk.tangential_velocity_error == pytest.approx(0.0, abs=1e-12)
    assert sk.circular_velocity == pytest.approx(1.0)


def test_station_keeping_splits_velocity():
    sk = station_keeping_error([0.0, 2.0, 0.0], [0.3, 0.4, 0.0], target_radius=1.0, mu=1.0)

    assert sk.position_error == pytest.approx(1.0)
    assert sk.radial_velocity == pytest.approx(0.4)
    assert sk.tangential_velocity == pytest.approx(0.3)
    assert sk.tangential_velocity_error == pytest.approx(0.3 - 1.0)


def test_station_keeping_at_origin_is_finite():
    sk = station_keeping_error([0.0, 0.0, 0.0], [0.0, 0.5, 0.0], target_radius=1.0)

    assert all(np.isfinite(sk))
    assert sk.radial_velocity == 0.0
    assert sk.tangential_velocity == pytest.approx(0.5)


def test_tangential_velocity_never_negative():
    # Purely radial motion: v_tan^2 cancels to roughly zero
    sk = station_keeping_error([3.0, 4.0, 0.0], [0.6, 0.8, 0.0], target_radius=5.0)

    assert sk.tangential_velocity >= 0.0
    assert sk.tangential_velocity < 1e-4


def test_circular_velocity_guards_zero_radius():
    assert np.isfinite(circular_velocity(0.0))
    assert circular_velocity(4.0, mu=1.0) == pytest.approx(0.5)
