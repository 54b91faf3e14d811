"""
Orbital elements and station-keeping errors derived from a raw state vector.

These are the per-frame diagnostics shown on the HUD and used by the
rollout analytics to classify frames against the tolerance band.
"""
from typing import NamedTuple
import numpy as np

from .constants import EPS, MU_CANONICAL


class DerivedElements(NamedTuple):
    """
    Osculating two-body quantities of a single state vector.

    Attributes:
        a: Semi-major axis (length units of r)
        e: Eccentricity magnitude
        angular_momentum: Magnitude of the specific angular momentum |r x v|
        specific_energy: v^2/2 - mu/|r|

    Note:
        Degenerate states (|r| = 0, energy ~ 0 for a parabolic orbit, or
        positive energy for an unbound one) produce nan/inf components
        instead of raising. Check is_finite() before displaying.
    """
    a: float
    e: float
    angular_momentum: float
    specific_energy: float

    def is_finite(self) -> bool:
        """True when every component is finite and safe to render."""
        return bool(np.all(np.isfinite(self)))


class StationKeepingError(NamedTuple):
    """
    Errors of a state vector relative to a circular target orbit.

    Attributes:
        radial_distance: |r|
        position_error: |r| - target_radius
        radial_velocity: v . r_hat
        tangential_velocity: sqrt(|v|^2 - v_rad^2)
        tangential_velocity_error: tangential_velocity - circular_velocity
        circular_velocity: sqrt(mu / target_radius)
    """
    radial_distance: float
    position_error: float
    radial_velocity: float
    tangential_velocity: float
    tangential_velocity_error: float
    circular_velocity: float


def orbital_elements_from_state(r, v, mu: float = MU_CANONICAL) -> DerivedElements:
    """
    Compute semi-major axis, eccentricity, angular momentum and energy from r and v.

    Args:
        r: Position vector [x, y, z]
        v: Velocity vector [vx, vy, vz]
        mu: Gravitational parameter of the central body

    Returns:
        DerivedElements, possibly with non-finite components for degenerate input
    """
    r = np.asarray(r, dtype=float)
    v = np.asarray(v, dtype=float)

    with np.errstate(divide='ignore', invalid='ignore'):
        rmag = np.linalg.norm(r)
        vmag = np.linalg.norm(v)

        # Specific angular momentum
        h = np.cross(r, v)
        hmag = np.linalg.norm(h)

        energy = 0.5 * vmag**2 - mu / rmag
        a = -mu / (2.0 * energy)
        if rmag == 0.0:
            a = np.nan
        elif not energy < 0.0:
            # Unbound (or undefined) orbit has no semi-major axis to render
            a = np.inf if energy == 0.0 else np.nan

        # Eccentricity vector
        e_vec = np.cross(v, h) / mu - r / rmag
        e = np.linalg.norm(e_vec)

    return DerivedElements(a=float(a), e=float(e), angular_momentum=float(hmag),
                           specific_energy=float(energy))


def circular_velocity(target_radius: float, mu: float = MU_CANONICAL) -> float:
    """Speed of a circular orbit at target_radius."""
    return float(np.sqrt(mu / max(EPS, target_radius)))


def station_keeping_error(r, v, target_radius: float, mu: float = MU_CANONICAL) -> StationKeepingError:
    """
    Radial and tangential errors of (r, v) against a circular orbit of radius target_radius.

    Pure function. The radial unit vector is guarded with EPS so a state at the
    origin yields zero radial velocity rather than nan.
    """
    r = np.asarray(r, dtype=float)
    v = np.asarray(v, dtype=float)

    rmag = float(np.linalg.norm(r))
    r_hat = r / (rmag + EPS)

    v_rad = float(np.dot(v, r_hat))
    vmag = float(np.linalg.norm(v))
    # Clamp cancellation noise below zero
    v_tan = float(np.sqrt(max(0.0, vmag**2 - v_rad**2)))
    v_circ = circular_velocity(target_radius, mu)

    return StationKeepingError(
        radial_distance=rmag,
        position_error=rmag - target_radius,
        radial_velocity=v_rad,
        tangential_velocity=v_tan,
        tangential_velocity_error=v_tan - v_circ,
        circular_velocity=v_circ,
    )
