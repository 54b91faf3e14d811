"""
Per-episode rollout analytics.

A single forward pass over the frames of an episode accumulates reward and
fuel, records thrust spikes and proximity events, and detects the debounced
capture into the station-keeping tolerance band.
"""
from enum import Enum
import logging
from typing import Any, Iterable, List, NamedTuple, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .capture import CaptureDetector
from .config import AnalyticsConfig
from .diagnostics import StationKeepingError, station_keeping_error
from .rollout import Episode, Frame, Rollout

logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    THRUST = 'thrust'
    ENTERED_TOLERANCE = 'entered_tolerance'
    TOO_CLOSE = 'too_close'
    ESCAPE = 'escape'


# Tie-break for events sharing a frame index: detection order within a frame
_KIND_ORDER = {kind: rank for rank, kind in enumerate(EventKind)}


class Event(BaseModel):
    """A discrete timeline marker at a frame index."""
    model_config = ConfigDict(frozen=True)

    frame_index: int = Field(..., ge=0, description="Frame index of the event")
    kind: EventKind = Field(..., description="Event type")


class EpisodeMetrics(BaseModel):
    """
    Aggregate metrics of one episode, derived once and immutable afterwards.

    Attributes
    ----------
    reward_sum : float
        Sum of per-frame rewards (missing rewards count as 0)
    fuel_sum : float
        Sum of per-frame thrust magnitudes
    captured_at : Optional[int]
        First frame of the first qualifying in-tolerance run after an excursion
    events : Tuple[Event, ...]
        Events in ascending frame order
    frame_count : int
        Number of frames in the episode
    percent_in_tolerance : float
        Fraction of frames in tolerance, in [0, 1]
    """
    model_config = ConfigDict(frozen=True)

    reward_sum: float = 0.0
    fuel_sum: float = 0.0
    captured_at: Optional[int] = None
    events: Tuple[Event, ...] = ()
    frame_count: int = Field(default=0, ge=0)
    percent_in_tolerance: float = Field(default=0.0, ge=0.0, le=1.0)

    @property
    def captured(self) -> bool:
        return self.captured_at is not None

    def events_of(self, kind: EventKind) -> List[Event]:
        """Events of a single kind, in frame order."""
        return [event for event in self.events if event.kind == kind]


class EpisodeSeries(NamedTuple):
    """
    Per-frame traces of one episode, each an array of length frame_count.
    """
    reward: np.ndarray
    fuel: np.ndarray
    radial_distance: np.ndarray
    radial_velocity: np.ndarray
    tangential_velocity_error: np.ndarray


def frame_errors(frame: Frame, config: AnalyticsConfig) -> Tuple[float, float, StationKeepingError]:
    """
    Position and tangential velocity errors of a frame.

    Values precomputed on the frame by the recording instrumentation take
    priority over recomputation from r and v.

    Returns
    -------
    position_error, tangential_velocity_error, station_keeping
    """
    sk = station_keeping_error(frame.r, frame.v, config.target_radius, mu=config.mu)
    pos_err = sk.position_error if frame.pos_err is None else frame.pos_err
    v_tan_err = sk.tangential_velocity_error if frame.v_tan_err is None else frame.v_tan_err
    return pos_err, v_tan_err, sk


def is_in_tolerance(frame: Frame, config: AnalyticsConfig) -> bool:
    """Classify a frame against the station-keeping tolerance band."""
    pos_err, v_tan_err, sk = frame_errors(frame, config)
    in_tolerance = pos_err <= config.position_tolerance and abs(v_tan_err) <= config.velocity_tolerance
    if in_tolerance and config.radial_velocity_tolerance is not None:
        in_tolerance = abs(sk.radial_velocity) <= config.radial_velocity_tolerance
    return in_tolerance


def _as_episode(episode: Any) -> Episode:
    if isinstance(episode, Episode):
        return episode
    return Episode.from_record(episode)


def analyze_episode(episode: Any, config: Optional[AnalyticsConfig] = None) -> EpisodeMetrics:
    """
    Compute EpisodeMetrics for one episode in a single forward pass.

    Parameters
    ----------
    episode : Episode or record
        The frames to analyze, in index order. Raw records (a list of frame
        mappings or a mapping with a 'frames' field) are validated first.
    config : AnalyticsConfig, optional
        Tolerances and thresholds. Defaults to AnalyticsConfig().

    Returns
    -------
    EpisodeMetrics
        An empty episode yields zero sums, no events, no capture and
        percent_in_tolerance = 0.
    """
    config = config or AnalyticsConfig()
    episode = _as_episode(episode)

    reward_sum = 0.0
    fuel_sum = 0.0
    in_tolerance_count = 0
    events: List[Event] = []
    detector = CaptureDetector(config.debounce_window)

    for idx, frame in enumerate(episode.frames):
        reward_sum += frame.reward_value

        thrust_mag = frame.thrust_magnitude
        fuel_sum += thrust_mag
        if thrust_mag > config.thrust_spike_threshold:
            events.append(Event(frame_index=idx, kind=EventKind.THRUST))

        in_tolerance = is_in_tolerance(frame, config)
        if in_tolerance:
            in_tolerance_count += 1
        captured_at = detector.update(idx, in_tolerance)
        if captured_at is not None:
            events.append(Event(frame_index=captured_at, kind=EventKind.ENTERED_TOLERANCE))

        rmag = float(np.linalg.norm(frame.r))
        if rmag < config.too_close_radius:
            events.append(Event(frame_index=idx, kind=EventKind.TOO_CLOSE))
        if rmag > config.escape_radius:
            events.append(Event(frame_index=idx, kind=EventKind.ESCAPE))

    # The capture event is back-dated to the start of its run
    events.sort(key=lambda event: (event.frame_index, _KIND_ORDER[event.kind]))

    frame_count = len(episode)
    percent_in_tolerance = in_tolerance_count / frame_count if frame_count else 0.0

    metrics = EpisodeMetrics(
        reward_sum=reward_sum,
        fuel_sum=fuel_sum,
        captured_at=detector.captured_at,
        events=tuple(events),
        frame_count=frame_count,
        percent_in_tolerance=percent_in_tolerance,
    )
    logger.debug("episode analyzed: %d frames, reward %.4f, fuel %.4f, captured_at %s, %d events",
                 frame_count, reward_sum, fuel_sum, detector.captured_at, len(events))
    return metrics


def analyze_episodes(episodes: Iterable[Any], config: Optional[AnalyticsConfig] = None) -> List[EpisodeMetrics]:
    """
    Analyze each episode independently.

    The result is index-aligned with the input; no state is carried between
    episodes.
    """
    config = config or AnalyticsConfig()
    return [analyze_episode(episode, config) for episode in episodes]


def analyze_rollout(rollout: Rollout, config: Optional[AnalyticsConfig] = None) -> List[EpisodeMetrics]:
    """Analyze every episode of a rollout."""
    metrics = analyze_episodes(rollout.episodes, config)
    logger.debug("rollout '%s': analyzed %d episodes", rollout.name, len(metrics))
    return metrics


def episode_series(episode: Any, config: Optional[AnalyticsConfig] = None) -> EpisodeSeries:
    """
    Per-frame reward, fuel, radius, radial velocity and tangential velocity error.

    Errors are always recomputed from r and v here; precomputed frame fields
    are not consulted.
    """
    config = config or AnalyticsConfig()
    episode = _as_episode(episode)

    n = len(episode)
    reward = np.zeros(n)
    fuel = np.zeros(n)
    radial_distance = np.zeros(n)
    radial_velocity = np.zeros(n)
    v_tan_err = np.zeros(n)

    for idx, frame in enumerate(episode.frames):
        sk = station_keeping_error(frame.r, frame.v, config.target_radius, mu=config.mu)
        reward[idx] = frame.reward_value
        fuel[idx] = frame.thrust_magnitude
        radial_distance[idx] = sk.radial_distance
        radial_velocity[idx] = sk.radial_velocity
        v_tan_err[idx] = sk.tangential_velocity_error

    return EpisodeSeries(reward=reward, fuel=fuel, radial_distance=radial_distance,
                         radial_velocity=radial_velocity, tangential_velocity_error=v_tan_err)
