"""
Configuration for rollout analytics.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import (
    TARGET_RADIUS, POSITION_TOLERANCE, VELOCITY_TOLERANCE,
    THRUST_SPIKE_THRESHOLD, DEBOUNCE_WINDOW, MU_CANONICAL,
    TOO_CLOSE_RADIUS, ESCAPE_RADIUS,
)


class AnalyticsConfig(BaseModel):
    """
    Tunables for the per-episode analytics pass.

    Attributes
    ----------
    target_radius : float
        Radius of the circular station-keeping orbit
    position_tolerance : float
        Upper bound on |r| - target_radius for a frame to be in tolerance
    velocity_tolerance : float
        Bound on |tangential velocity error| for a frame to be in tolerance
    thrust_spike_threshold : float
        Thrust magnitude above which a thrust event is recorded
    debounce_window : int
        Consecutive in-tolerance frames required to confirm a capture
    mu : float
        Gravitational parameter used for the circular reference velocity
    too_close_radius : float
        |r| below which a too_close event is recorded
    escape_radius : float
        |r| above which an escape event is recorded
    radial_velocity_tolerance : Optional[float]
        If set, in-tolerance also requires |radial velocity| <= this value
    """
    model_config = ConfigDict(frozen=True)

    target_radius: float = Field(default=TARGET_RADIUS, gt=0.0, description="Target orbit radius")
    position_tolerance: float = Field(default=POSITION_TOLERANCE, ge=0.0, description="Position tolerance")
    velocity_tolerance: float = Field(default=VELOCITY_TOLERANCE, ge=0.0, description="Tangential velocity tolerance")
    thrust_spike_threshold: float = Field(default=THRUST_SPIKE_THRESHOLD, ge=0.0,
                                          description="Thrust magnitude that counts as a spike")
    debounce_window: int = Field(default=DEBOUNCE_WINDOW, ge=1, description="Capture debounce window K")
    mu: float = Field(default=MU_CANONICAL, gt=0.0, description="Gravitational parameter")
    too_close_radius: float = Field(default=TOO_CLOSE_RADIUS, ge=0.0, description="Too-close radius")
    escape_radius: float = Field(default=ESCAPE_RADIUS, gt=0.0, description="Escape radius")
    radial_velocity_tolerance: Optional[float] = Field(default=None, ge=0.0,
                                                       description="Optional radial velocity tolerance")

    @model_validator(mode='after')
    def validate_radii(self):
        if self.escape_radius <= self.too_close_radius:
            raise ValueError(
                f"escape_radius ({self.escape_radius}) must be greater than "
                f"too_close_radius ({self.too_close_radius})"
            )
        return self
