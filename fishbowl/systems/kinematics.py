"""Particle kinematics: pellets sink, bubbles rise.

Architecture Notes:
- Runs in UpdatePhase.KINEMATICS, before seeking
- Constant-velocity integration: ``y += velocity * dt`` (bubbles subtract)
- Every removal decision in a step uses the pre-step fish boxes and the
  particle's own pre-step position; there is no second pass
- A pellet that both touches a fish and reaches the gravel is eaten
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from fishbowl.collision_system import CollisionDetector, default_collision_detector
from fishbowl.entities import Bubble, Particle, Pellet
from fishbowl.events import EventBus, ParticleRemovedEvent, RemovalReason
from fishbowl.systems.base import BaseSystem, StepContext, SystemResult
from fishbowl.update_phases import UpdatePhase, runs_in_phase

logger = logging.getLogger(__name__)


@runs_in_phase(UpdatePhase.KINEMATICS)
class KinematicsSystem(BaseSystem):
    """Moves particles and removes those that are eaten or leave the water.

    The particle lists are owned by the simulation and shared with this
    system; they are rewritten in place each step so other holders of the
    same list see the post-step state.

    Attributes:
        pellets: Falling particles, in spawn order
        bubbles: Rising particles, in spawn order
    """

    def __init__(
        self,
        pellets: List[Pellet],
        bubbles: List[Bubble],
        event_bus: Optional[EventBus] = None,
        detector: Optional[CollisionDetector] = None,
    ) -> None:
        super().__init__("Kinematics")
        self.pellets = pellets
        self.bubbles = bubbles
        self._event_bus = event_bus if event_bus is not None else EventBus()
        self._detector = detector if detector is not None else default_collision_detector

        self._total_eaten = 0
        self._total_floor = 0
        self._total_surfaced = 0

    def _do_update(self, context: StepContext) -> SystemResult:
        eaten, floor, moved_pellets = self._advance_pellets(context)
        surfaced, moved_bubbles = self._advance_bubbles(context)

        self._total_eaten += eaten
        self._total_floor += floor
        self._total_surfaced += surfaced

        return SystemResult(
            entities_affected=moved_pellets + moved_bubbles,
            entities_removed=eaten + floor + surfaced,
            details={
                "moved": moved_pellets + moved_bubbles,
                "eaten": eaten,
                "floor": floor,
                "surfaced": surfaced,
            },
        )

    def _advance_pellets(self, context: StepContext) -> Tuple[int, int, int]:
        floor_y = context.tank.floor_y
        kept: List[Pellet] = []
        eaten = floor = 0

        for pellet in self.pellets:
            new_y = pellet.next_y(context.dt)
            rect = pellet.rect_at(new_y, context.tank.width)

            fish_id = self._detector.find_hit(rect, context.agent_boxes)
            if fish_id is not None:
                eaten += 1
                self._emit_removed(pellet, RemovalReason.EATEN, new_y, context.frame, fish_id)
                continue

            if new_y >= floor_y - pellet.size:
                floor += 1
                self._emit_removed(pellet, RemovalReason.FLOOR, new_y, context.frame)
                continue

            pellet.y = new_y
            kept.append(pellet)

        self.pellets[:] = kept
        return eaten, floor, len(kept)

    def _advance_bubbles(self, context: StepContext) -> Tuple[int, int]:
        kept: List[Bubble] = []
        surfaced = 0

        for bubble in self.bubbles:
            new_y = bubble.next_y(context.dt)
            if new_y <= -bubble.size:
                surfaced += 1
                self._emit_removed(bubble, RemovalReason.SURFACE, new_y, context.frame)
                continue
            bubble.y = new_y
            kept.append(bubble)

        self.bubbles[:] = kept
        return surfaced, len(kept)

    def _emit_removed(
        self,
        particle: Particle,
        reason: RemovalReason,
        new_y: float,
        frame: int,
        fish_id: Optional[int] = None,
    ) -> None:
        logger.debug("%s %d removed (%s) at y=%.1f", particle.kind, particle.id, reason.value, new_y)
        self._event_bus.emit(
            ParticleRemovedEvent(
                frame=frame,
                particle_id=particle.id,
                kind=particle.kind,
                reason=reason,
                fish_id=fish_id,
                y=new_y,
            )
        )

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            **super().get_debug_info(),
            "pellets": len(self.pellets),
            "bubbles": len(self.bubbles),
            "total_eaten": self._total_eaten,
            "total_floor": self._total_floor,
            "total_surfaced": self._total_surfaced,
        }
