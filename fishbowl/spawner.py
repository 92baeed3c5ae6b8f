"""Batch creation of pellets and bubbles.

Architecture Notes:
- Randomness comes from an injected ``random.Random`` so seeded runs are
  reproducible
- Every range argument is validated before anything is created; a bad
  range raises ``InvalidRangeError`` and the call spawns nothing
"""

import logging
import random
from typing import Iterable, List, Optional, Tuple

from fishbowl.config.simulation_config import BubbleSpawnConfig, PelletSpawnConfig
from fishbowl.entities import Bubble, Pellet
from fishbowl.entity_ids import IdGenerator, default_id_generator
from fishbowl.exceptions import InvalidRangeError

logger = logging.getLogger(__name__)

Range = Tuple[float, float]


def validate_ranges(ranges: Iterable[Tuple[str, Range]]) -> None:
    """Raise ``InvalidRangeError`` for the first ``(name, (low, high))`` with low > high."""
    for name, (low, high) in ranges:
        if low > high:
            raise InvalidRangeError(name, low, high)


def validate_count(count: int) -> None:
    if count < 0:
        raise InvalidRangeError("count", 0, count)


class ParticleSpawner:
    """Creates pellets and bubbles with randomized parameters.

    Attributes:
        pellet_config: Default ranges for pellets
        bubble_config: Default ranges for bubbles
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        ids: Optional[IdGenerator] = None,
        pellet_config: Optional[PelletSpawnConfig] = None,
        bubble_config: Optional[BubbleSpawnConfig] = None,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._ids = ids if ids is not None else default_id_generator
        self.pellet_config = pellet_config if pellet_config is not None else PelletSpawnConfig()
        self.bubble_config = bubble_config if bubble_config is not None else BubbleSpawnConfig()
        self._total_pellets = 0
        self._total_bubbles = 0

    @property
    def rng(self) -> random.Random:
        return self._rng

    def spawn_pellets(
        self,
        count: int,
        x_range: Optional[Range] = None,
        velocity_range: Optional[Range] = None,
        size: Optional[float] = None,
        start_y: Optional[float] = None,
    ) -> List[Pellet]:
        """Create ``count`` pellets at the drop height.

        Each pellet gets an independent horizontal position and sink speed.

        Args:
            count: Number of pellets to create
            x_range: Horizontal range in percent of bowl width
            velocity_range: Sink speed range in px/s
            size: Pellet diameter in px
            start_y: Drop height in px (negative is above the water line)

        Returns:
            The new pellets, in creation order

        Raises:
            InvalidRangeError: If a range has min > max or count is negative
        """
        cfg = self.pellet_config
        x_range = x_range if x_range is not None else cfg.x_range
        velocity_range = velocity_range if velocity_range is not None else cfg.velocity_range
        size = size if size is not None else cfg.size
        start_y = start_y if start_y is not None else cfg.start_y

        validate_count(count)
        validate_ranges([("x_range", x_range), ("velocity_range", velocity_range)])

        pellets = [
            Pellet(
                id=self._ids.next_particle(),
                x_pct=self._rng.uniform(*x_range),
                y=start_y,
                velocity=self._rng.uniform(*velocity_range),
                size=size,
            )
            for _ in range(count)
        ]
        self._total_pellets += len(pellets)
        logger.debug("Spawned %d pellets at y=%.1f", len(pellets), start_y)
        return pellets

    def spawn_bubbles(
        self,
        count: int,
        start_y: float,
        x_range: Optional[Range] = None,
        velocity_range: Optional[Range] = None,
        size_range: Optional[Range] = None,
        opacity_range: Optional[Range] = None,
        jitter: Optional[float] = None,
    ) -> List[Bubble]:
        """Create ``count`` bubbles near ``start_y``.

        Each bubble starts within ``+/- jitter`` px of ``start_y``.

        Raises:
            InvalidRangeError: If a range has min > max or count is negative
        """
        cfg = self.bubble_config
        x_range = x_range if x_range is not None else cfg.x_range
        velocity_range = velocity_range if velocity_range is not None else cfg.velocity_range
        size_range = size_range if size_range is not None else cfg.size_range
        opacity_range = opacity_range if opacity_range is not None else cfg.opacity_range
        jitter = jitter if jitter is not None else cfg.jitter
        jitter_range = (-jitter, jitter)

        validate_count(count)
        validate_ranges(
            [
                ("x_range", x_range),
                ("velocity_range", velocity_range),
                ("size_range", size_range),
                ("opacity_range", opacity_range),
                ("jitter", jitter_range),
            ]
        )

        bubbles = [
            Bubble(
                id=self._ids.next_particle(),
                x_pct=self._rng.uniform(*x_range),
                y=start_y + self._rng.uniform(*jitter_range),
                velocity=self._rng.uniform(*velocity_range),
                size=self._rng.uniform(*size_range),
                opacity=self._rng.uniform(*opacity_range),
            )
            for _ in range(count)
        ]
        self._total_bubbles += len(bubbles)
        logger.debug("Spawned %d bubbles near y=%.1f", len(bubbles), start_y)
        return bubbles

    def random_baseline(self, baseline_range: Range) -> float:
        """Whole-number cruising depth drawn from ``baseline_range``."""
        validate_ranges([("baseline_range", baseline_range)])
        return float(round(self._rng.uniform(*baseline_range)))

    def get_stats(self) -> dict:
        return {"pellets": self._total_pellets, "bubbles": self._total_bubbles}
