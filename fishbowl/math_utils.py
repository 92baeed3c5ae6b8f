"""Centralized math utilities for the simulation.

Pure Python helpers: an axis-aligned rectangle in bowl px and the
rate-limited scalar step used by depth seeking.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with edges in bowl px (y grows downward)."""

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_tuple(cls, values: Tuple[float, float, float, float]) -> "Rect":
        """Build from ``(left, top, right, bottom)``."""
        left, top, right, bottom = values
        return cls(float(left), float(top), float(right), float(bottom))

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def overlaps(self, other: "Rect") -> bool:
        """Inclusive AABB overlap; touching edges count as a hit."""
        return (
            self.right >= other.left
            and self.left <= other.right
            and self.bottom >= other.top
            and self.top <= other.bottom
        )


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into ``[low, high]``."""
    return max(low, min(high, value))


def step_toward(current: float, target: float, max_step: float) -> float:
    """Move ``current`` toward ``target`` by at most ``max_step``.

    Never overshoots: when the remaining distance is smaller than
    ``max_step`` the target is returned exactly.
    """
    delta = target - current
    if abs(delta) < max_step:
        return current + delta
    return current + math.copysign(max_step, delta) if delta else current
