"""
Debounced capture detection.

A capture is confirmed the first time the craft has been outside the
tolerance band and then stays inside it for ``window`` consecutive frames.
The capture index is the first frame of that qualifying run.
"""
from enum import Enum
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class CaptureState(str, Enum):
    NEVER_LEFT_TOLERANCE = 'never_left_tolerance'
    EXCURSION_SEEN = 'excursion_seen'
    CAPTURED = 'captured'


class CaptureDetector:
    """
    Small state machine driven by the per-frame in-tolerance flag.

    Transitions
    -----------
    NEVER_LEFT_TOLERANCE --out--> EXCURSION_SEEN
    EXCURSION_SEEN --window consecutive in--> CAPTURED
    CAPTURED is terminal; captured_at never changes afterwards.

    Frames must be fed in index order.
    """

    def __init__(self, window: int):
        if window < 1:
            raise ValueError(f"window must be at least 1, got {window}")
        self.window = window
        self.state = CaptureState.NEVER_LEFT_TOLERANCE
        self.streak = 0
        self.captured_at: Optional[int] = None

    def update(self, idx: int, in_tolerance: bool) -> Optional[int]:
        """
        Advance by one frame.

        Returns the capture index on the frame where the capture is
        confirmed, otherwise None.
        """
        if not in_tolerance:
            self.streak = 0
            if self.state is CaptureState.NEVER_LEFT_TOLERANCE:
                self.state = CaptureState.EXCURSION_SEEN
            return None

        self.streak += 1
        if self.state is CaptureState.EXCURSION_SEEN and self.streak == self.window:
            self.state = CaptureState.CAPTURED
            self.captured_at = idx - self.window + 1
            logger.debug("capture confirmed at frame %d (run start %d)", idx, self.captured_at)
            return self.captured_at
        return None

    @property
    def captured(self) -> bool:
        return self.state is CaptureState.CAPTURED
