"""
A/B comparison of two rollouts analyzed separately.

The analytics engine knows nothing about pairing; this module pairs the
metrics of a baseline rollout and a trained rollout by episode index.
"""
import logging
from typing import List, Optional, Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict

from .analytics import EpisodeMetrics

logger = logging.getLogger(__name__)


class EpisodeComparison(BaseModel):
    """
    Trained-minus-baseline differences for one episode index.

    capture_delta is None unless both runs captured.
    """
    model_config = ConfigDict(frozen=True)

    episode_index: int
    baseline: EpisodeMetrics
    trained: EpisodeMetrics
    reward_delta: float
    fuel_delta: float
    capture_delta: Optional[int]
    percent_in_tolerance_delta: float


class ComparisonSummary(BaseModel):
    """Aggregate view of a list of EpisodeComparison."""
    model_config = ConfigDict(frozen=True)

    episode_count: int
    mean_reward_delta: float
    mean_fuel_delta: float
    mean_percent_in_tolerance_delta: float
    baseline_captures: int
    trained_captures: int


def compare_episode(index: int, baseline: EpisodeMetrics, trained: EpisodeMetrics) -> EpisodeComparison:
    if baseline.captured and trained.captured:
        capture_delta = trained.captured_at - baseline.captured_at
    else:
        capture_delta = None

    return EpisodeComparison(
        episode_index=index,
        baseline=baseline,
        trained=trained,
        reward_delta=trained.reward_sum - baseline.reward_sum,
        fuel_delta=trained.fuel_sum - baseline.fuel_sum,
        capture_delta=capture_delta,
        percent_in_tolerance_delta=trained.percent_in_tolerance - baseline.percent_in_tolerance,
    )


def compare_rollouts(baseline: Sequence[EpisodeMetrics],
                     trained: Sequence[EpisodeMetrics]) -> List[EpisodeComparison]:
    """
    Pair two metrics sequences index by index.

    If the sequences differ in length, only the common prefix is compared.
    """
    if len(baseline) != len(trained):
        logger.warning("rollouts differ in length (%d baseline vs %d trained); comparing first %d episodes",
                       len(baseline), len(trained), min(len(baseline), len(trained)))

    return [compare_episode(idx, mb, mt) for idx, (mb, mt) in enumerate(zip(baseline, trained))]


def summarize_comparison(comparisons: Sequence[EpisodeComparison]) -> ComparisonSummary:
    """Mean deltas and capture counts over all compared episodes."""
    if not comparisons:
        return ComparisonSummary(episode_count=0, mean_reward_delta=0.0, mean_fuel_delta=0.0,
                                 mean_percent_in_tolerance_delta=0.0,
                                 baseline_captures=0, trained_captures=0)

    return ComparisonSummary(
        episode_count=len(comparisons),
        mean_reward_delta=float(np.mean([c.reward_delta for c in comparisons])),
        mean_fuel_delta=float(np.mean([c.fuel_delta for c in comparisons])),
        mean_percent_in_tolerance_delta=float(np.mean([c.percent_in_tolerance_delta for c in comparisons])),
        baseline_captures=sum(c.baseline.captured for c in comparisons),
        trained_captures=sum(c.trained.captured for c in comparisons),
    )
