"""Frame clock for the simulation.

Converts host timestamps (milliseconds, e.g. a display refresh callback's
``now``) into a clamped per-step delta time in seconds.
"""

import logging
from typing import Any, Dict, Optional

from fishbowl.config.tank import MAX_FRAME_DT, MS_PER_SECOND

logger = logging.getLogger(__name__)


class FrameClock:
    """Derives a clamped delta time from successive timestamps.

    ``last`` is updated on every tick, including ticks taken while the
    simulation is paused, so resuming never applies a backlog of time.

    Attributes:
        max_dt: Upper clamp on a single delta, in seconds
        last: Last observed timestamp in ms (None before the first tick)
    """

    def __init__(self, start: Optional[float] = None, max_dt: float = MAX_FRAME_DT) -> None:
        """Initialize the clock.

        Args:
            start: Optional initial timestamp in ms. When omitted the first
                tick yields a zero delta.
            max_dt: Upper clamp on a single delta, in seconds
        """
        self.max_dt = max_dt
        self.last: Optional[float] = start
        self._ticks = 0
        self._backward_ticks = 0

    def tick(self, now: float) -> float:
        """Record ``now`` and return the clamped delta time in seconds."""
        if self.last is None:
            dt = 0.0
        elif now < self.last:
            logger.warning(
                "Non-monotonic timestamp %.3f after %.3f; using zero delta", now, self.last
            )
            self._backward_ticks += 1
            dt = 0.0
        else:
            dt = min(self.max_dt, (now - self.last) / MS_PER_SECOND)

        self.last = now
        self._ticks += 1
        return dt

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "last": self.last,
            "max_dt": self.max_dt,
            "ticks": self._ticks,
            "backward_ticks": self._backward_ticks,
        }
