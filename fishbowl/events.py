"""Event system for decoupling the simulation from its observers.

Systems emit events onto an ``EventBus``; renderers, statistics and tests
subscribe to the types they care about. The bus is synchronous and NOT
thread-safe, which matches the single-threaded frame loop.

Usage:
    bus = EventBus()
    bus.subscribe(ParticleRemovedEvent, lambda e: print(e.reason))
    bus.emit(ParticleRemovedEvent(particle_id=3, kind="pellet", reason=RemovalReason.EATEN))
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E")


class RemovalReason(str, Enum):
    """Why a particle left the simulation."""

    EATEN = "eaten"  # Pellet touched a fish box
    FLOOR = "floor"  # Pellet reached the gravel
    SURFACE = "surface"  # Bubble rose past the water line


@dataclass
class Event:
    """Base class for all events."""

    frame: int = 0  # Step when event occurred (0 if not set)


@dataclass
class ParticleSpawnedEvent(Event):
    """Emitted for each particle created by a spawn call."""

    particle_id: int = 0
    kind: str = "pellet"  # "pellet" or "bubble"


@dataclass
class ParticleRemovedEvent(Event):
    """Emitted when a particle is removed during a kinematics step."""

    particle_id: int = 0
    kind: str = "pellet"
    reason: RemovalReason = RemovalReason.FLOOR
    fish_id: Optional[int] = None  # Set when reason is EATEN
    y: float = 0.0  # Position the particle would have moved to


@dataclass
class FishRegisteredEvent(Event):
    fish_id: int = 0
    baseline: float = 0.0


@dataclass
class FishUnregisteredEvent(Event):
    fish_id: int = 0


@dataclass
class SimulationStateEvent(Event):
    """Emitted when the driver changes state (running, paused, stopped)."""

    state: str = ""


class EventBus:
    """Central hub for event publication and subscription.

    Example:
        bus = EventBus()
        unsubscribe = bus.subscribe(ParticleRemovedEvent, handler)
        bus.emit(ParticleRemovedEvent(particle_id=1))
        unsubscribe()
    """

    def __init__(self) -> None:
        self._subscribers: Dict[Type[Event], List[Callable[[Any], None]]] = {}
        self._emit_count: int = 0

    def subscribe(
        self,
        event_type: Type[E],
        callback: Callable[[E], None],
    ) -> Callable[[], None]:
        """Subscribe to events of a specific type.

        Returns:
            Unsubscribe function - call it to remove the subscription
        """
        self._subscribers.setdefault(event_type, []).append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers.get(event_type, []):
                self._subscribers[event_type].remove(callback)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Emit an event to all subscribers of its exact type.

        Subscribers are called synchronously in subscription order. A
        subscriber that raises is logged and the remaining subscribers
        still receive the event.
        """
        event_type = type(event)
        self._emit_count += 1

        for callback in list(self._subscribers.get(event_type, [])):
            try:
                callback(event)
            except Exception:
                logger.error(
                    "Error in event subscriber for %s", event_type.__name__, exc_info=True
                )

    def subscriber_count(self, event_type: Type[Event]) -> int:
        """Get number of subscribers for an event type."""
        return len(self._subscribers.get(event_type, []))

    @property
    def total_emit_count(self) -> int:
        return self._emit_count
