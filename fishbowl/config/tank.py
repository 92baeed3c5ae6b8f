"""Bowl geometry and frame timing constants.

All vertical distances are px measured down from the top of the water.
Horizontal positions of particles are stored as percent of bowl width.
"""

# =============================================================================
# BOWL GEOMETRY
# =============================================================================
TANK_WIDTH = 640  # px
TANK_HEIGHT = 480  # px
GRAVEL_HEIGHT = 70  # px. Pellets vanish when they reach the top of the gravel.

# =============================================================================
# FRAME TIMING
# =============================================================================
# One long frame (backgrounded tab, GC pause, slow render) must not teleport
# a pellet through a fish or overshoot a seek target.
MAX_FRAME_DT = 0.05  # seconds
MS_PER_SECOND = 1000.0

FRAME_RATE = 60  # Default cadence of the headless frame loop
