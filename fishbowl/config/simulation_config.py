"""Lightweight simulation configuration helpers."""

from dataclasses import dataclass, field
from typing import Tuple

from fishbowl.config.particles import (
    BUBBLE_COUNT,
    BUBBLE_OPACITY_RANGE,
    BUBBLE_SIZE_RANGE,
    BUBBLE_START_JITTER,
    BUBBLE_START_OFFSET,
    BUBBLE_VELOCITY_RANGE,
    BUBBLE_X_RANGE,
    FEED_COUNT,
    PELLET_SIZE,
    PELLET_START_Y,
    PELLET_VELOCITY_RANGE,
    PELLET_X_RANGE,
)
from fishbowl.config.seeking import (
    FISH_BASELINE_RANGE,
    RELAX_RATE,
    SEEK_MAX_DEPTH,
    SEEK_MIN_DEPTH,
    SEEK_RATE,
)
from fishbowl.config.tank import GRAVEL_HEIGHT, MAX_FRAME_DT, TANK_HEIGHT, TANK_WIDTH

Range = Tuple[float, float]


@dataclass
class TankGeometry:
    """Bowl dimensions in px.

    Attributes:
        width: Inner width of the bowl
        height: Height from water line to the bowl bottom
        gravel_height: Height of the gravel zone pellets cannot enter
    """

    width: float = TANK_WIDTH
    height: float = TANK_HEIGHT
    gravel_height: float = GRAVEL_HEIGHT

    @property
    def floor_y(self) -> float:
        """Y coordinate of the top of the gravel."""
        return self.height - self.gravel_height


@dataclass
class PelletSpawnConfig:
    """Defaults for ``create_falling_particles``."""

    x_range: Range = PELLET_X_RANGE
    velocity_range: Range = PELLET_VELOCITY_RANGE
    size: float = PELLET_SIZE
    start_y: float = PELLET_START_Y
    feed_count: int = FEED_COUNT


@dataclass
class BubbleSpawnConfig:
    """Defaults for ``create_rising_particles``."""

    x_range: Range = BUBBLE_X_RANGE
    velocity_range: Range = BUBBLE_VELOCITY_RANGE
    size_range: Range = BUBBLE_SIZE_RANGE
    opacity_range: Range = BUBBLE_OPACITY_RANGE
    start_offset: float = BUBBLE_START_OFFSET
    jitter: float = BUBBLE_START_JITTER
    blow_count: int = BUBBLE_COUNT


@dataclass
class SeekConfig:
    """Rate limits and clamp range for fish depth seeking."""

    seek_rate: float = SEEK_RATE
    relax_rate: float = RELAX_RATE
    min_depth: float = SEEK_MIN_DEPTH
    max_depth: float = SEEK_MAX_DEPTH
    baseline_range: Range = FISH_BASELINE_RANGE


@dataclass
class ClockConfig:
    """Frame clock settings.

    Attributes:
        max_dt: Upper clamp on a single step's delta time, in seconds
    """

    max_dt: float = MAX_FRAME_DT


@dataclass
class SimulationConfig:
    """Top-level configuration for a ``FishbowlSimulation``."""

    tank: TankGeometry = field(default_factory=TankGeometry)
    pellets: PelletSpawnConfig = field(default_factory=PelletSpawnConfig)
    bubbles: BubbleSpawnConfig = field(default_factory=BubbleSpawnConfig)
    seeking: SeekConfig = field(default_factory=SeekConfig)
    clock: ClockConfig = field(default_factory=ClockConfig)
