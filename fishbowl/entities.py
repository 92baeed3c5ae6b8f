"""Simulation entities: particles (pellets, bubbles) and fish.

Entities are plain mutable records. Systems own the rules that move and
remove them; the entities only know how to describe themselves.
"""

from dataclasses import dataclass
from typing import Any, Dict

from fishbowl.math_utils import Rect


@dataclass
class Particle:
    """A particle moving along the vertical axis.

    Attributes:
        id: Unique id from the shared particle counter
        x_pct: Horizontal position as percent of bowl width (fixed)
        y: Top edge in px from the water line
        velocity: Speed in px/s (always stored as a magnitude)
        size: Diameter in px, also the bounding-box edge length
    """

    id: int
    x_pct: float
    y: float
    velocity: float
    size: float

    kind = "particle"

    def rect_at(self, y: float, tank_width: float) -> Rect:
        """Bounding box of this particle if its top edge were at ``y``."""
        center_x = self.x_pct / 100.0 * tank_width
        half = self.size / 2.0
        return Rect(center_x - half, y, center_x + half, y + self.size)

    def to_render_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "x_pct": self.x_pct, "y": self.y, "size": self.size}


@dataclass
class Pellet(Particle):
    """A food pellet sinking toward the gravel."""

    kind = "pellet"

    def next_y(self, dt: float) -> float:
        return self.y + self.velocity * dt


@dataclass
class Bubble(Particle):
    """An air bubble rising to the surface."""

    opacity: float = 1.0

    kind = "bubble"

    def next_y(self, dt: float) -> float:
        return self.y - self.velocity * dt

    def to_render_dict(self) -> Dict[str, Any]:
        data = super().to_render_dict()
        data["opacity"] = self.opacity
        return data


@dataclass
class Fish:
    """A fish tracked by the simulation.

    Only the baseline is stored here. The live depth lives in the
    simulation's coordinate map so unregistering a fish removes every
    trace of it in one place.

    Attributes:
        id: Caller-supplied (or generated) fish id
        baseline: Cruising depth in percent of bowl height
    """

    id: int
    baseline: float
