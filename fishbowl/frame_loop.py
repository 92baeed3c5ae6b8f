"""Host-side frame scheduling for headless runs.

The simulation never schedules itself. ``FrameLoop`` plays the part of a
display refresh callback: it calls ``step(now)`` once per frame with a
timestamp from its time source, and registers a cancel hook with the
simulation so ``simulation.stop()`` ends the loop.
"""

import logging
import time
from typing import Callable, Mapping, Optional

from fishbowl.config.tank import FRAME_RATE, MS_PER_SECOND
from fishbowl.simulation import BoxLike, FishbowlSimulation

logger = logging.getLogger(__name__)

BoxProvider = Callable[[FishbowlSimulation, float], Mapping[int, BoxLike]]
FrameCallback = Callable[[FishbowlSimulation, int], None]


class VirtualTimeSource:
    """Timestamps that advance by exactly one frame per call.

    Lets a headless run go faster than real time while every step still
    sees the nominal frame delta.
    """

    def __init__(self, fps: float = FRAME_RATE, start: float = 0.0) -> None:
        self.frame_ms = MS_PER_SECOND / fps
        self._now = start

    def __call__(self) -> float:
        now = self._now
        self._now += self.frame_ms
        return now


def wall_clock_ms() -> float:
    return time.monotonic() * MS_PER_SECOND


class FrameLoop:
    """Drives a simulation one frame at a time.

    Attributes:
        simulation: The simulation being driven
        fps: Target frames per second (only used for pacing real-time runs)
        frames_run: Number of frames dispatched so far
    """

    def __init__(
        self,
        simulation: FishbowlSimulation,
        fps: float = FRAME_RATE,
        time_source: Optional[Callable[[], float]] = None,
        box_provider: Optional[BoxProvider] = None,
        realtime: bool = False,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.simulation = simulation
        self.fps = fps
        if time_source is None:
            time_source = wall_clock_ms if realtime else VirtualTimeSource(fps)
        self._time_source = time_source
        self._box_provider = box_provider
        self._realtime = realtime
        self._sleep = sleep
        self._cancelled = False
        self.frames_run = 0
        simulation.bind_schedule(self.cancel)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Drop the frame registration; ``run`` returns before the next frame."""
        self._cancelled = True

    def run(self, max_frames: int, on_frame: Optional[FrameCallback] = None) -> int:
        """Dispatch up to ``max_frames`` frames.

        Args:
            max_frames: Upper bound on frames to dispatch
            on_frame: Called after every step with the simulation and frame index

        Returns:
            Number of frames dispatched by this call
        """
        dispatched = 0
        frame_seconds = 1.0 / self.fps
        while dispatched < max_frames and not self._cancelled:
            started = time.monotonic()
            now = self._time_source()
            boxes = self._box_provider(self.simulation, now) if self._box_provider else None
            self.simulation.step(now, boxes)
            dispatched += 1
            self.frames_run += 1
            if on_frame is not None:
                on_frame(self.simulation, self.frames_run)
            if self._realtime:
                remaining = frame_seconds - (time.monotonic() - started)
                if remaining > 0:
                    self._sleep(remaining)

        if self._cancelled:
            logger.debug("Frame loop cancelled after %d frames", self.frames_run)
        return dispatched
