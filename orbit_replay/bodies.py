from typing import Any, Iterable, Mapping, Optional
import logging

import numpy as np
import jax.numpy as jnp
import pydantic
from pydantic import ConfigDict

from orbit_replay.constants import MAX_VISUAL_ECCENTRICITY, MU_SUN_AU_DAY, ORBIT_PATH_POINTS
from orbit_replay.orbital_elements import OrbitalElements

logger = logging.getLogger(__name__)


# Fallback catalog used when no planet data is supplied. Angles in degrees, a in AU.
DEFAULT_PLANET_RECORDS = [
    {'name': 'Mercury', 'a': 0.3871, 'e': 0.2056, 'i': 7.005, 'Omega': 48.331, 'omega': 29.124, 'M0': 174.796},
    {'name': 'Venus', 'a': 0.7233, 'e': 0.0068, 'i': 3.395, 'Omega': 76.680, 'omega': 54.884, 'M0': 50.416},
    {'name': 'Earth', 'a': 1.0000, 'e': 0.0167, 'i': 0.000, 'Omega': -11.260, 'omega': 102.947, 'M0': 100.464},
    {'name': 'Mars', 'a': 1.5237, 'e': 0.0934, 'i': 1.850, 'Omega': 49.558, 'omega': 286.503, 'M0': 355.453},
    {'name': 'Jupiter', 'a': 5.2026, 'e': 0.0489, 'i': 1.303, 'Omega': 100.464, 'omega': 273.867, 'M0': 20.020},
    {'name': 'Saturn', 'a': 9.5549, 'e': 0.0565, 'i': 2.485, 'Omega': 113.665, 'omega': 339.392, 'M0': 317.020},
]


def visual_eccentricity(e: float, scale: float = 1.0, cap: float = MAX_VISUAL_ECCENTRICITY) -> float:
    """
    Exaggerate an eccentricity for display, clamped to ``cap``.

    This is applied before elements reach the Kepler solver, which itself
    accepts any 0 <= e < 1.
    """
    return min(e * scale, cap)


class Body(pydantic.BaseModel):
    """
    A planet moving on a fixed two-body Kepler orbit around the Sun.

    Attributes:
        name: Name of the body (e.g., "Mars")
        elements: Orbital elements at epoch t=0, angles in radians, a in AU
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)  # Allow OrbitalElements (NamedTuple)

    name: str
    elements: OrbitalElements

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'Body':
        """
        Create a body from a catalog record with fields name, a, e, i, Omega, omega, M0.

        Catalog angles are in degrees and are converted to radians here.
        """
        e = float(record['e'])
        if e >= 1.0:
            logger.warning("body '%s' has e=%g; only bound orbits are modeled", record['name'], e)

        elements = OrbitalElements(
            a=float(record['a']),
            e=e,
            i=np.deg2rad(float(record['i'])),
            Omega=np.deg2rad(float(record['Omega'])),
            omega=np.deg2rad(float(record['omega'])),
            M=np.deg2rad(float(record['M0']))
        )
        return cls(name=str(record['name']), elements=elements)

    def display_elements(self, ecc_scale: float = 1.0) -> OrbitalElements:
        """Elements with the eccentricity exaggerated for display."""
        return self.elements._replace(e=visual_eccentricity(self.elements.e, ecc_scale))

    def position_at(self, t_days: float, mu: float = MU_SUN_AU_DAY, ecc_scale: float = 1.0) -> jnp.ndarray:
        """
        Heliocentric position (AU) of the body t_days after epoch.

        Examples:
            >>> earth = load_bodies()['Earth']
            >>> r = earth.position_at(365.25)  # roughly back where it started
        """
        from orbit_replay.kepler import elements_to_cartesian, mean_anomaly_at

        elements = self.display_elements(ecc_scale)
        M = mean_anomaly_at(elements, t_days, mu)
        return elements_to_cartesian(elements._replace(M=M))

    def orbit_path(self, n_points: int = ORBIT_PATH_POINTS, ecc_scale: float = 1.0) -> jnp.ndarray:
        """The orbit ellipse as an (n_points, 3) array in AU."""
        from orbit_replay.kepler import sample_orbit_path

        return sample_orbit_path(self.display_elements(ecc_scale), n_points)

    def period(self, mu: float = MU_SUN_AU_DAY) -> float:
        """
        Orbital period from Kepler's third law, T = 2*pi*sqrt(a^3/mu).

        In days for the default mu.
        """
        a = self.elements.a
        return float(2.0 * np.pi * np.sqrt(a**3 / mu))

    def __repr__(self) -> str:
        return f"Body(name='{self.name}', a={self.elements.a})"

    def __str__(self) -> str:
        return self.name


def load_bodies(records: Optional[Iterable[Mapping[str, Any]]] = None) -> dict[str, Body]:
    """
    Build bodies from catalog records.

    Args:
        records: Already-deserialized catalog records. When None or empty,
            the default six-planet catalog is used.

    Returns:
        Dictionary mapping body name to Body, in catalog order
    """
    records = list(records) if records is not None else []
    if not records:
        return default_planets()

    bodies = {}
    for record in records:
        body = Body.from_record(record)
        bodies[body.name] = body
    return bodies


def default_planets() -> dict[str, Body]:
    """The fallback catalog, Mercury through Saturn."""
    return load_bodies(DEFAULT_PLANET_RECORDS)
