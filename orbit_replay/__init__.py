# Configure JAX to use double precision (64-bit floats) throughout the package
import jax
jax.config.update("jax_enable_x64", True)

from .orbital_elements import OrbitalElements
from .state_vector import StateVector

from .constants import (
    # Constants
    MU_CANONICAL,
    MU_SUN_AU_DAY,
    EPS,
    KEPLER_ITERATIONS,
)

from .kepler import (
    # Kepler solver
    solve_eccentric_anomaly,
    elements_to_cartesian,
    sample_orbit_path,
    mean_motion,
    mean_anomaly_at,
)

from .diagnostics import (
    # State vector analysis
    DerivedElements,
    StationKeepingError,
    orbital_elements_from_state,
    circular_velocity,
    station_keeping_error,
)

from .config import AnalyticsConfig

from .rollout import (
    # Rollout records
    Frame,
    Episode,
    Rollout,
)

from .capture import CaptureDetector, CaptureState

from .analytics import (
    # Rollout analytics
    Event,
    EventKind,
    EpisodeMetrics,
    EpisodeSeries,
    is_in_tolerance,
    analyze_episode,
    analyze_episodes,
    analyze_rollout,
    episode_series,
)

from .comparison import (
    # A/B comparison
    EpisodeComparison,
    ComparisonSummary,
    compare_rollouts,
    summarize_comparison,
)

from .bodies import (
    # Planet catalog
    Body,
    DEFAULT_PLANET_RECORDS,
    default_planets,
    load_bodies,
    visual_eccentricity,
)

__all__ = [
    # Constants
    "MU_CANONICAL",
    "MU_SUN_AU_DAY",
    "EPS",
    "KEPLER_ITERATIONS",

    # Named tuples
    "OrbitalElements",
    "StateVector",
    "DerivedElements",
    "StationKeepingError",
    "EpisodeSeries",

    # Kepler solver
    "solve_eccentric_anomaly",
    "elements_to_cartesian",
    "sample_orbit_path",
    "mean_motion",
    "mean_anomaly_at",

    # State vector analysis
    "orbital_elements_from_state",
    "circular_velocity",
    "station_keeping_error",

    # Rollout records and analytics
    "AnalyticsConfig",
    "Frame",
    "Episode",
    "Rollout",
    "CaptureDetector",
    "CaptureState",
    "Event",
    "EventKind",
    "EpisodeMetrics",
    "is_in_tolerance",
    "analyze_episode",
    "analyze_episodes",
    "analyze_rollout",
    "episode_series",

    # A/B comparison
    "EpisodeComparison",
    "ComparisonSummary",
    "compare_rollouts",
    "summarize_comparison",

    # Bodies
    "Body",
    "DEFAULT_PLANET_RECORDS",
    "default_planets",
    "load_bodies",
    "visual_eccentricity",
]
