"""Tests for particle/fish collision detection."""

from fishbowl.collision_system import RectCollisionDetector, default_collision_detector
from fishbowl.entities import Pellet
from fishbowl.math_utils import Rect


class TestRectOverlap:
    """AABB overlap including edge contact."""

    def test_overlapping_boxes(self):
        assert Rect(0, 0, 10, 10).overlaps(Rect(5, 5, 15, 15))

    def test_touching_edges_count_as_hit(self):
        assert Rect(0, 0, 10, 10).overlaps(Rect(10, 0, 20, 10))
        assert Rect(0, 0, 10, 10).overlaps(Rect(0, 10, 10, 20))

    def test_separated_boxes(self):
        assert not Rect(0, 0, 10, 10).overlaps(Rect(10.01, 0, 20, 10))
        assert not Rect(0, 0, 10, 10).overlaps(Rect(0, 11, 10, 20))

    def test_containment(self):
        assert Rect(0, 0, 100, 100).overlaps(Rect(40, 40, 41, 41))


class TestCollisionDetector:
    """Hit tests against a snapshot of fish boxes."""

    def test_no_boxes_means_no_hit(self):
        detector = RectCollisionDetector()
        assert detector.find_hit(Rect(0, 0, 5, 5), {}) is None
        assert not detector.any_hit(Rect(0, 0, 5, 5), {})

    def test_reports_first_hit_in_mapping_order(self):
        boxes = {
            7: Rect(100, 100, 120, 120),
            3: Rect(0, 0, 10, 10),
            9: Rect(5, 5, 30, 30),
        }
        assert default_collision_detector.find_hit(Rect(6, 6, 8, 8), boxes) == 3

    def test_pellet_box_uses_percent_width(self):
        """A pellet at 50% of a 640px bowl is centered at x=320."""
        pellet = Pellet(id=1, x_pct=50.0, y=0.0, velocity=0.0, size=6.0)
        rect = pellet.rect_at(100.0, 640.0)
        assert rect == Rect(317.0, 100.0, 323.0, 106.0)
        assert default_collision_detector.collides(rect, Rect(323.0, 90.0, 400.0, 100.0))
