"""Spawn ranges for pellets (falling) and bubbles (rising).

Every range is an inclusive ``(min, max)`` pair. Callers may override any of
them per spawn call; a pair with ``min > max`` is rejected rather than clamped.
"""

# =============================================================================
# PELLETS
# =============================================================================
PELLET_X_RANGE = (4.0, 96.0)  # % of bowl width, keeps pellets off the glass
PELLET_VELOCITY_RANGE = (120.0, 160.0)  # px/s, toward the floor
PELLET_SIZE = 6.0  # px
PELLET_START_Y = -8.0  # px, just above the water line
FEED_COUNT = 5  # Pellets per feed when the caller gives no count

# =============================================================================
# BUBBLES
# =============================================================================
BUBBLE_X_RANGE = (2.0, 98.0)  # % of bowl width
BUBBLE_VELOCITY_RANGE = (120.0, 170.0)  # px/s, toward the surface
BUBBLE_SIZE_RANGE = (6.0, 14.0)  # px
BUBBLE_OPACITY_RANGE = (0.7, 0.98)
BUBBLE_START_OFFSET = 80.0  # px above the bowl bottom (just over the gravel)
BUBBLE_START_JITTER = 8.0  # px, each bubble starts within +/- this of start_y
BUBBLE_COUNT = 10  # Bubbles per blow when the caller gives no count
