"""Fish depth seeking.

Each fish tracks one scalar: its depth in percent of bowl height. While
pellets are in the water every fish with a box this step glides toward the
pellet nearest its current depth; with no pellets, every fish drifts back
to its baseline.

Architecture Notes:
- Runs in UpdatePhase.SEEK, after kinematics has removed eaten pellets
- Movement is a rate-limited linear step (``rate * dt`` per step), so the
  time to cover a distance does not depend on the frame rate and the step
  never overshoots its target
- The depth map is owned by the simulation; this system lazily inserts a
  missing entry at the fish's baseline and never deletes entries
"""

from typing import Any, Dict, List, Mapping, Optional

from fishbowl.config.simulation_config import SeekConfig
from fishbowl.entities import Fish, Pellet
from fishbowl.math_utils import clamp, step_toward
from fishbowl.systems.base import BaseSystem, StepContext, SystemResult
from fishbowl.update_phases import UpdatePhase, runs_in_phase


def nearest_pellet(pellets: List[Pellet], depth_px: float) -> Optional[Pellet]:
    """Pellet whose top edge is vertically closest to ``depth_px``.

    Ties go to the first pellet in list order.
    """
    best: Optional[Pellet] = None
    best_distance = float("inf")
    for pellet in pellets:
        distance = abs(pellet.y - depth_px)
        if distance < best_distance:
            best_distance = distance
            best = pellet
    return best


@runs_in_phase(UpdatePhase.SEEK)
class SeekSystem(BaseSystem):
    """Steers fish depths toward pellets, or back to baseline.

    Attributes:
        config: Rates and clamp range
    """

    def __init__(
        self,
        pellets: List[Pellet],
        fish: Mapping[int, Fish],
        depths: Dict[int, float],
        config: Optional[SeekConfig] = None,
    ) -> None:
        super().__init__("Seek")
        self._pellets = pellets
        self._fish = fish
        self._depths = depths
        self.config = config if config is not None else SeekConfig()

    def depth_of(self, fish: Fish) -> float:
        """Current depth of ``fish``, initializing it to the baseline if unseen."""
        depth = self._depths.get(fish.id)
        if depth is None:
            depth = fish.baseline
            self._depths[fish.id] = depth
        return depth

    def target_for(self, fish: Fish, tank_height: float) -> Optional[float]:
        """Clamped target depth for ``fish``, or None when there are no pellets."""
        depth_px = tank_height * (self.depth_of(fish) / 100.0)
        pellet = nearest_pellet(self._pellets, depth_px)
        if pellet is None:
            return None
        return clamp(
            pellet.y / tank_height * 100.0, self.config.min_depth, self.config.max_depth
        )

    def _do_update(self, context: StepContext) -> SystemResult:
        if self._pellets:
            return self._seek(context)
        return self._relax(context)

    def _seek(self, context: StepContext) -> SystemResult:
        max_step = self.config.seek_rate * context.dt
        moved = 0
        holding = 0
        for fish in self._fish.values():
            current = self.depth_of(fish)
            if fish.id not in context.agent_boxes:
                # No box this frame: the fish is not laid out, so it holds depth.
                holding += 1
                continue
            target = self.target_for(fish, context.tank.height)
            if target is None:
                continue
            new_depth = step_toward(current, target, max_step)
            if new_depth != current:
                moved += 1
            self._depths[fish.id] = new_depth

        return SystemResult(
            entities_affected=moved,
            details={"seeking": len(self._fish) - holding, "holding": holding},
        )

    def _relax(self, context: StepContext) -> SystemResult:
        max_step = self.config.relax_rate * context.dt
        moved = 0
        for fish in self._fish.values():
            current = self.depth_of(fish)
            new_depth = step_toward(current, fish.baseline, max_step)
            if new_depth != current:
                moved += 1
            self._depths[fish.id] = new_depth

        return SystemResult(entities_affected=moved, details={"relaxing": moved})

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            **super().get_debug_info(),
            "tracked": len(self._depths),
            "seek_rate": self.config.seek_rate,
            "relax_rate": self.config.relax_rate,
        }
