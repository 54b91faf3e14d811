"""
Kepler's equation and conversion of orbital elements to Cartesian position.

JAX implementation so the functions can be jit-compiled and vmapped over
catalogs of planets or samples along an orbit.
"""
import jax
import jax.numpy as jnp
from jax import jit

from .orbital_elements import OrbitalElements
from .constants import KEPLER_ITERATIONS, MU_CANONICAL, ORBIT_PATH_POINTS

TWO_PI = 2.0 * jnp.pi


def solve_eccentric_anomaly(M, e, max_iter: int = KEPLER_ITERATIONS):
    """
    Solve Kepler's equation M = E - e*sin(E) for eccentric anomaly E.

    Newton-Raphson seeded with E0 = M and run for a fixed number of
    iterations with jax.lax.scan. There is no convergence test: for the
    e < 0.9 orbits replayed here eight steps reach double precision.
    Raise max_iter for orbits closer to parabolic.

    Parameters
    ----------
    M : float or jnp.ndarray
        Mean anomaly (radians)
    e : float or jnp.ndarray
        Eccentricity, 0 <= e < 1. Not clamped.
    max_iter : int
        Number of Newton iterations (must be a Python int)

    Returns
    -------
    E : jnp.ndarray
        Eccentric anomaly (radians)
    """
    M = jnp.asarray(M, dtype=float)
    e = jnp.asarray(e, dtype=float)
    M, e = jnp.broadcast_arrays(M, e)

    def body_fn(E, _):
        f = E - e * jnp.sin(E) - M
        fp = 1.0 - e * jnp.cos(E)
        E_new = E - f / fp
        return E_new, None

    E_final, _ = jax.lax.scan(body_fn, M, None, length=max_iter)
    return E_final


@jit
def elements_to_cartesian(elements: OrbitalElements) -> jnp.ndarray:
    """
    Convert orbital elements to a Cartesian position vector.

    The orbital-plane point is rotated by the 3-1-3 sequence: argument of
    periapsis in-plane, tilt by inclination, then longitude of the
    ascending node. The result is in the same length units as ``a``.
    """
    a, e, i, Omega, omega, M = elements

    E = solve_eccentric_anomaly(M, e)
    cos_E = jnp.cos(E)
    sin_E = jnp.sin(E)

    # True anomaly and orbital-plane radius
    nu = jnp.arctan2(jnp.sqrt(1.0 - e**2) * sin_E, cos_E - e)
    r_orb = a * (1.0 - e * cos_E)
    x_orb = r_orb * jnp.cos(nu)
    y_orb = r_orb * jnp.sin(nu)

    cos_Omega = jnp.cos(Omega)
    sin_Omega = jnp.sin(Omega)
    cos_i = jnp.cos(i)
    sin_i = jnp.sin(i)
    cos_omega = jnp.cos(omega)
    sin_omega = jnp.sin(omega)

    # Rotate by omega in the orbital plane
    x1 = cos_omega * x_orb - sin_omega * y_orb
    y1 = sin_omega * x_orb + cos_omega * y_orb

    # Tilt by inclination about the node line
    y2 = cos_i * y1
    z2 = sin_i * y1

    # Rotate by Omega about the reference pole
    x = cos_Omega * x1 - sin_Omega * y2
    y = sin_Omega * x1 + cos_Omega * y2

    return jnp.stack([x, y, z2], axis=-1)


def sample_orbit_path(elements: OrbitalElements, n_points: int = ORBIT_PATH_POINTS) -> jnp.ndarray:
    """
    Sample the orbit ellipse at evenly spaced mean anomalies over [0, 2*pi).

    The mean anomaly stored in ``elements`` is ignored; this draws the static
    ellipse, not the current position.

    Returns
    -------
    path : jnp.ndarray
        Array of shape (n_points, 3)
    """
    if n_points < 1:
        raise ValueError(f"n_points must be at least 1, got {n_points}")

    M = jnp.linspace(0.0, TWO_PI, n_points, endpoint=False)
    return jax.vmap(lambda m: elements_to_cartesian(elements._replace(M=m)))(M)


def mean_motion(a, mu: float = MU_CANONICAL):
    """Mean motion n = sqrt(mu / a^3)."""
    return jnp.sqrt(mu / jnp.asarray(a, dtype=float)**3)


def mean_anomaly_at(elements: OrbitalElements, t, mu: float = MU_CANONICAL):
    """
    Mean anomaly after time ``t`` past the epoch of ``elements``, in [0, 2*pi).

    ``t`` is in the time unit implied by ``mu`` (days for MU_SUN_AU_DAY).
    """
    M = jnp.mod(elements.M + mean_motion(elements.a, mu) * t, TWO_PI)
    # jnp.mod can round a tiny negative remainder up to exactly 2*pi
    return jnp.where(M >= TWO_PI, 0.0, M)
