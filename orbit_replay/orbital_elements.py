"""
Orbital elements representation for planets and spacecraft.
"""
from typing import NamedTuple


class OrbitalElements(NamedTuple):
    """
    Keplerian orbital elements of a body at an epoch.

    All angular quantities are in radians. The tuple is a JAX pytree, so it
    can be passed straight through jax.jit and jax.vmap.

    Attributes:
        a: Semi-major axis (AU or canonical length units)
        e: Eccentricity (dimensionless, 0 <= e < 1)
        i: Inclination relative to the reference plane (radians)
        Omega: Longitude of the ascending node (radians)
        omega: Argument of periapsis (radians)
        M: Mean anomaly (radians)

    Note:
        - Only bound elliptical orbits are modeled: 0 <= e < 1
        - Parabolic and hyperbolic orbits are not supported
    """
    a: float  # semi-major axis
    e: float  # eccentricity
    i: float  # inclination (rad)
    Omega: float  # longitude of ascending node (rad)
    omega: float  # argument of periapsis (rad)
    M: float  # mean anomaly (rad)
