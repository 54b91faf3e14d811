"""
Spacecraft state representation in Cartesian coordinates.
"""
from typing import NamedTuple
import numpy as np


class StateVector(NamedTuple):
    """
    Cartesian state of a spacecraft at one recorded frame.

    Attributes:
        r: Position vector [x, y, z]
        v: Velocity vector [vx, vy, vz]

    Examples:
        >>> import numpy as np
        >>> state = StateVector(
        ...     r=np.array([1.0, 0.0, 0.0]),  # on the target circle
        ...     v=np.array([0.0, 1.0, 0.0])   # circular speed for mu = 1
        ... )
        >>> state.radius
        1.0
    """
    r: np.ndarray  # position [x, y, z]
    v: np.ndarray  # velocity [vx, vy, vz]

    @property
    def radius(self) -> float:
        return float(np.linalg.norm(self.r))

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.v))
