"""
Rollout representation using Pydantic models.

A rollout is a list of episodes; an episode is an ordered list of frames, one
per simulation step. Records arrive already deserialized (e.g. from JSON)
as plain mappings and sequences.
"""
from pydantic import BaseModel, Field
from typing import Any, List, Mapping, Optional, Sequence, Tuple
import numpy as np

from .state_vector import StateVector


class Frame(BaseModel):
    """
    A single recorded simulation step.

    Optional fields default to None; a missing thrust or reward is treated as
    zero by the analytics. pos_err and v_tan_err are values precomputed by the
    recording instrumentation and take priority over recomputation.
    """
    r: Tuple[float, float, float] = Field(..., description="Position vector [x, y, z]")
    v: Tuple[float, float, float] = Field(..., description="Velocity vector [vx, vy, vz]")
    thrust: Optional[Tuple[float, float, float]] = Field(default=None, description="Thrust vector")
    reward: Optional[float] = Field(default=None, description="Step reward")
    pos_err: Optional[float] = Field(default=None, description="Precomputed |r| - target radius")
    v_tan_err: Optional[float] = Field(default=None, description="Precomputed tangential velocity error")

    @property
    def state(self) -> StateVector:
        return StateVector(r=np.array(self.r), v=np.array(self.v))

    @property
    def thrust_magnitude(self) -> float:
        if self.thrust is None:
            return 0.0
        return float(np.linalg.norm(self.thrust))

    @property
    def reward_value(self) -> float:
        return 0.0 if self.reward is None else float(self.reward)


class Episode(BaseModel):
    """
    Ordered frames of one run. Frame index is the discrete time step.
    """
    frames: List[Frame] = Field(default_factory=list, description="Frames in step order")

    def __len__(self) -> int:
        return len(self.frames)

    @classmethod
    def from_record(cls, record: Any) -> 'Episode':
        """
        Build an episode from a list of frame mappings or a mapping with a 'frames' field.
        """
        if isinstance(record, Mapping):
            return cls.model_validate({'frames': record.get('frames', [])})
        return cls.model_validate({'frames': list(record)})


class Rollout(BaseModel):
    """
    All episodes recorded for one policy (e.g. the baseline or the trained agent).
    """
    name: str = Field(default='rollout', description="Label of the rollout source")
    episodes: List[Episode] = Field(default_factory=list, description="Episodes in recording order")

    def __len__(self) -> int:
        return len(self.episodes)

    @classmethod
    def from_record(cls, record: Mapping[str, Any], name: str = 'rollout') -> 'Rollout':
        """
        Build a rollout from a mapping of the form {"episodes": [...]}.

        A missing 'episodes' field yields an empty rollout.
        """
        episodes: Sequence[Any] = record.get('episodes') or []
        return cls(name=name, episodes=[Episode.from_record(ep) for ep in episodes])
