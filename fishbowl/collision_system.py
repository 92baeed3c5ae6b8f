"""Collision detection between particles and fish.

Architecture Notes:
- CollisionDetector classes implement the Strategy pattern so the kinematics
  system can be handed a different hit test without changing its loop
- Boxes are passed in per query; nothing here retains geometry between steps
"""

from typing import Mapping, Optional

from fishbowl.math_utils import Rect


class CollisionDetector:
    """Base class for collision detection strategies."""

    def collides(self, rect1: Rect, rect2: Rect) -> bool:
        """Check if two boxes collide."""
        raise NotImplementedError("Subclasses must implement collides()")

    def find_hit(self, rect: Rect, agent_boxes: Mapping[int, Rect]) -> Optional[int]:
        """Return the id of the first fish whose box collides with ``rect``.

        Args:
            rect: The particle's bounding box
            agent_boxes: Fish id -> bounding box snapshot for this step

        Returns:
            The first colliding fish id in mapping order, or None
        """
        for agent_id, box in agent_boxes.items():
            if self.collides(rect, box):
                return agent_id
        return None

    def any_hit(self, rect: Rect, agent_boxes: Mapping[int, Rect]) -> bool:
        return self.find_hit(rect, agent_boxes) is not None


class RectCollisionDetector(CollisionDetector):
    """Rectangle-based collision detection (AABB, inclusive edges)."""

    def collides(self, rect1: Rect, rect2: Rect) -> bool:
        return rect1.overlaps(rect2)


# Default collision detector
default_collision_detector = RectCollisionDetector()
