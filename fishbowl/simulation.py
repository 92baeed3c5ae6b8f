"""Simulation driver for the fishbowl.

``FishbowlSimulation`` owns the particle sets, the registered fish and
their live depths, and runs one step per host frame:

1. Tick the frame clock (always, even while paused)
2. Kinematics: move particles, remove eaten/landed pellets and surfaced bubbles
3. Seek: steer fish depths toward the remaining pellets, or back home

The driver owns no timer. A host scheduler (a display refresh callback,
or ``fishbowl.frame_loop.FrameLoop`` for headless runs) calls ``step(now)``.
Fish boxes come from the host's layout each frame and are discarded once
the step that consumed them has run.
"""

import copy
import dataclasses
import logging
import random
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from fishbowl.config.simulation_config import SimulationConfig, TankGeometry
from fishbowl.entities import Bubble, Fish, Pellet
from fishbowl.entity_ids import IdGenerator, default_id_generator
from fishbowl.events import (
    EventBus,
    FishRegisteredEvent,
    FishUnregisteredEvent,
    ParticleSpawnedEvent,
    SimulationStateEvent,
)
from fishbowl.exceptions import DuplicateAgentError, InvalidBaselineError, UnknownAgentError
from fishbowl.math_utils import Rect
from fishbowl.spawner import ParticleSpawner, Range
from fishbowl.state_machine import DRIVER_TRANSITIONS, DriverState, StateMachine
from fishbowl.systems.base import BaseSystem, StepContext, SystemResult
from fishbowl.systems.kinematics import KinematicsSystem
from fishbowl.systems.seeking import SeekSystem
from fishbowl.time_system import FrameClock
from fishbowl.update_phases import get_system_phase

logger = logging.getLogger(__name__)

BoxLike = Union[Rect, Sequence[float]]


def _coerce_rect(box: BoxLike) -> Rect:
    """Accept a ``Rect`` or a ``(left, top, right, bottom)`` sequence."""
    if isinstance(box, Rect):
        return box
    return Rect.from_tuple(tuple(box))  # type: ignore[arg-type]


class FishbowlSimulation:
    """Pellets, bubbles and depth-seeking fish in one bowl.

    Attributes:
        config: Geometry, spawn ranges, seek rates and clock settings
        event_bus: Receives spawn, removal, fish and state events
        clock: Frame clock deriving dt from host timestamps
        frame: Number of steps that actually ran (paused steps excluded)
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        ids: Optional[IdGenerator] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        """Initialize the simulation.

        Args:
            config: Simulation configuration (defaults if not provided)
            rng: Random source for spawning; takes precedence over ``seed``
            seed: Seed for a private ``random.Random`` when ``rng`` is omitted
            ids: Id generator (the process-wide one if not provided)
            event_bus: Event bus (a private one if not provided)
        """
        self.config = copy.deepcopy(config) if config is not None else SimulationConfig()
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self._ids = ids if ids is not None else default_id_generator
        self._rng = rng if rng is not None else random.Random(seed)

        self.pellets: List[Pellet] = []
        self.bubbles: List[Bubble] = []
        self._fish: Dict[int, Fish] = {}
        self._depths: Dict[int, float] = {}
        self._pending_boxes: Dict[int, Rect] = {}

        self.clock = FrameClock(max_dt=self.config.clock.max_dt)
        self.spawner = ParticleSpawner(
            rng=self._rng,
            ids=self._ids,
            pellet_config=self.config.pellets,
            bubble_config=self.config.bubbles,
        )
        self.kinematics = KinematicsSystem(self.pellets, self.bubbles, event_bus=self.event_bus)
        self.seek = SeekSystem(self.pellets, self._fish, self._depths, config=self.config.seeking)
        self._systems: List[BaseSystem] = sorted(
            [self.kinematics, self.seek], key=lambda system: get_system_phase(system).value
        )

        self._state = StateMachine(DriverState.RUNNING, DRIVER_TRANSITIONS, track_history=True)
        self._cancel_schedule: Optional[Callable[[], None]] = None
        self.frame = 0
        self._totals = SystemResult.empty()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def tank(self) -> TankGeometry:
        return self.config.tank

    @property
    def state(self) -> DriverState:
        return self._state.state

    @property
    def paused(self) -> bool:
        return self._state.state is DriverState.PAUSED

    @property
    def stopped(self) -> bool:
        return self._state.state is DriverState.STOPPED

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------

    def create_falling_particles(
        self,
        count: int,
        x_range: Optional[Range] = None,
        velocity_range: Optional[Range] = None,
        size: Optional[float] = None,
        start_y: Optional[float] = None,
    ) -> List[Pellet]:
        """Drop ``count`` pellets just above the water line.

        Raises:
            InvalidRangeError: If any range has min > max; nothing is spawned
        """
        pellets = self.spawner.spawn_pellets(
            count, x_range=x_range, velocity_range=velocity_range, size=size, start_y=start_y
        )
        self.pellets.extend(pellets)
        self._announce_spawn(pellets)
        return pellets

    def create_rising_particles(
        self,
        count: int,
        start_y: Optional[float] = None,
        x_range: Optional[Range] = None,
        velocity_range: Optional[Range] = None,
        size_range: Optional[Range] = None,
        opacity_range: Optional[Range] = None,
        jitter: Optional[float] = None,
    ) -> List[Bubble]:
        """Release ``count`` bubbles near ``start_y`` (default: just above the gravel).

        Raises:
            InvalidRangeError: If any range has min > max; nothing is spawned
        """
        if start_y is None:
            start_y = self.tank.height - self.config.bubbles.start_offset
        bubbles = self.spawner.spawn_bubbles(
            count,
            start_y,
            x_range=x_range,
            velocity_range=velocity_range,
            size_range=size_range,
            opacity_range=opacity_range,
            jitter=jitter,
        )
        self.bubbles.extend(bubbles)
        self._announce_spawn(bubbles)
        return bubbles

    def feed(self, count: Optional[int] = None) -> List[Pellet]:
        """Feed the fish with the default pellet settings."""
        return self.create_falling_particles(
            count if count is not None else self.config.pellets.feed_count
        )

    def blow_bubbles(self, count: Optional[int] = None) -> List[Bubble]:
        """Release a burst of bubbles with the default settings."""
        return self.create_rising_particles(
            count if count is not None else self.config.bubbles.blow_count
        )

    def _announce_spawn(self, particles: Sequence[Union[Pellet, Bubble]]) -> None:
        self._totals = self._totals + SystemResult(entities_spawned=len(particles))
        for particle in particles:
            self.event_bus.emit(
                ParticleSpawnedEvent(frame=self.frame, particle_id=particle.id, kind=particle.kind)
            )

    # ------------------------------------------------------------------
    # Fish
    # ------------------------------------------------------------------

    def register_agent(self, agent_id: int, baseline: float) -> Fish:
        """Add a fish cruising at ``baseline`` percent depth.

        Raises:
            DuplicateAgentError: If ``agent_id`` is already registered
            InvalidBaselineError: If ``baseline`` is outside the cruising range
        """
        if agent_id in self._fish:
            raise DuplicateAgentError(f"Fish {agent_id} is already registered")
        low, high = self.config.seeking.baseline_range
        if not low <= baseline <= high:
            raise InvalidBaselineError(f"Baseline {baseline!r} outside [{low}, {high}]")

        fish = Fish(id=agent_id, baseline=float(baseline))
        self._fish[agent_id] = fish
        logger.debug("Registered fish %d at baseline %.1f", agent_id, fish.baseline)
        self.event_bus.emit(
            FishRegisteredEvent(frame=self.frame, fish_id=agent_id, baseline=fish.baseline)
        )
        return fish

    def add_random_agent(self) -> Fish:
        """Register a fish with a fresh id and a random whole-number baseline."""
        agent_id = self._ids.next_fish()
        while agent_id in self._fish:
            agent_id = self._ids.next_fish()
        baseline = self.spawner.random_baseline(self.config.seeking.baseline_range)
        return self.register_agent(agent_id, baseline)

    def unregister_agent(self, agent_id: int) -> None:
        """Remove a fish and every piece of state tracked for it.

        Raises:
            UnknownAgentError: If ``agent_id`` was never registered
        """
        self._require_fish(agent_id)
        del self._fish[agent_id]
        self._depths.pop(agent_id, None)
        self._pending_boxes.pop(agent_id, None)
        logger.debug("Unregistered fish %d", agent_id)
        self.event_bus.emit(FishUnregisteredEvent(frame=self.frame, fish_id=agent_id))

    def update_agent_box(self, agent_id: int, box: BoxLike) -> None:
        """Supply the fish's bounding box for the next step.

        Raises:
            UnknownAgentError: If ``agent_id`` was never registered
        """
        self._require_fish(agent_id)
        self._pending_boxes[agent_id] = _coerce_rect(box)

    def _require_fish(self, agent_id: int) -> Fish:
        fish = self._fish.get(agent_id)
        if fish is None:
            raise UnknownAgentError(agent_id)
        return fish

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    def step(self, now: float, agent_boxes: Optional[Mapping[int, BoxLike]] = None) -> SystemResult:
        """Advance the simulation by one frame.

        Args:
            now: Host timestamp in ms; expected to be non-decreasing
            agent_boxes: Optional fish id -> box snapshot for this frame,
                merged over boxes given through ``update_agent_box``

        Returns:
            Combined result of the systems that ran (skipped while paused
            or stopped)

        Raises:
            UnknownAgentError: If ``agent_boxes`` names an unregistered fish.
                Nothing is advanced in that case.
        """
        if self.stopped:
            return SystemResult.skipped_result()

        if agent_boxes:
            incoming = {}
            for agent_id, box in agent_boxes.items():
                self._require_fish(agent_id)
                incoming[agent_id] = _coerce_rect(box)
            self._pending_boxes.update(incoming)

        dt = self.clock.tick(now)
        boxes, self._pending_boxes = self._pending_boxes, {}

        if self.paused:
            return SystemResult.skipped_result()

        self.frame += 1
        context = StepContext(
            frame=self.frame,
            dt=dt,
            tank=self.tank,
            agent_boxes=MappingProxyType(boxes),
        )
        result = SystemResult.empty()
        for system in self._systems:
            result = result + system.update(context)
        self._totals = self._totals + result
        return result

    def set_paused(self, paused: bool) -> None:
        """Pause or resume. Repeating the current state is a no-op.

        Raises:
            InvalidTransitionError: If the simulation has been stopped
        """
        target = DriverState.PAUSED if paused else DriverState.RUNNING
        if self._state.state is target:
            return
        self._state.transition(target, frame=self.frame, reason="set_paused")
        logger.info("Simulation %s at frame %d", target.value, self.frame)
        self.event_bus.emit(SimulationStateEvent(frame=self.frame, state=target.value))

    def bind_schedule(self, cancel: Callable[[], None]) -> None:
        """Remember how to cancel the host's frame registration for ``stop()``."""
        self._cancel_schedule = cancel

    def stop(self) -> None:
        """Stop for good and cancel the frame registration. Idempotent."""
        if self.stopped:
            return
        self._state.transition(DriverState.STOPPED, frame=self.frame, reason="stop")
        cancel, self._cancel_schedule = self._cancel_schedule, None
        if cancel is not None:
            cancel()
        logger.info("Simulation stopped at frame %d", self.frame)
        self.event_bus.emit(SimulationStateEvent(frame=self.frame, state=DriverState.STOPPED.value))

    def resize(self, width: float, height: float) -> None:
        """Follow a host layout change. Fish depths are percentages and carry over.

        Raises:
            ValueError: If the width is not positive or the height leaves no
                water above the gravel
        """
        gravel = self.tank.gravel_height
        if width <= 0 or height <= gravel:
            raise ValueError(
                f"Tank {width!r}x{height!r} leaves no water above {gravel!r}px of gravel"
            )
        self.config = dataclasses.replace(
            self.config, tank=TankGeometry(width=width, height=height, gravel_height=gravel)
        )
        logger.debug("Resized tank to %sx%s", width, height)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def falling_particles(self) -> List[Dict[str, Any]]:
        return [pellet.to_render_dict() for pellet in self.pellets]

    def rising_particles(self) -> List[Dict[str, Any]]:
        return [bubble.to_render_dict() for bubble in self.bubbles]

    def agent_coordinate(self, agent_id: int) -> float:
        """Current depth of a fish in percent of bowl height.

        Raises:
            UnknownAgentError: If ``agent_id`` was never registered
        """
        return self.seek.depth_of(self._require_fish(agent_id))

    def agent_ids(self) -> List[int]:
        return list(self._fish)

    def agents(self) -> List[Tuple[Fish, float]]:
        """Registered fish paired with their current depth, in registration order."""
        return [(fish, self.seek.depth_of(fish)) for fish in self._fish.values()]

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "frame": self.frame,
            "state": self.state.value,
            "fish": len(self._fish),
            "pellets": len(self.pellets),
            "bubbles": len(self.bubbles),
            "spawned": self._totals.entities_spawned,
            "eaten": self._totals.details.get("eaten", 0),
            "floor": self._totals.details.get("floor", 0),
            "surfaced": self._totals.details.get("surfaced", 0),
            "clock": self.clock.get_debug_info(),
            "ids": self._ids.get_stats(),
            "spawner": self.spawner.get_stats(),
            "systems": [system.get_debug_info() for system in self._systems],
        }
