"""Fish depth-seeking constants.

Depths are percent of bowl height (0 = surface, 100 = bowl bottom).
"""

# Baseline cruising depth is drawn from this range for random fish.
FISH_BASELINE_RANGE = (18.0, 82.0)

# Seek targets are clamped so fish never press against the surface or floor.
SEEK_MIN_DEPTH = 5.0
SEEK_MAX_DEPTH = 95.0

# Rate limits in percentage points per second. Relaxing is slower than
# seeking so the return home reads as a gentle drift.
SEEK_RATE = 60.0
RELAX_RATE = 20.0
