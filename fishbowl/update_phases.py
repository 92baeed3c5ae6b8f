"""Update phase definitions for explicit execution ordering.

The driver ticks the frame clock, then runs its systems in phase order:

1. KINEMATICS: Move pellets and bubbles, resolve collisions and exits
2. SEEK: Steer fish depths toward the remaining pellets

Kinematics must fully resolve removals before seeking reads the pellet
set, so a fish always chases where a pellet is now.
"""

from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Optional

__all__ = [
    "UpdatePhase",
    "runs_in_phase",
    "get_system_phase",
]

if TYPE_CHECKING:
    from fishbowl.systems.base import BaseSystem


class UpdatePhase(Enum):
    """Phases of a simulation step, in execution order."""

    KINEMATICS = auto()
    SEEK = auto()


def runs_in_phase(phase: UpdatePhase) -> Callable:
    """Decorator to declare which phase a system runs in.

    Example:
        @runs_in_phase(UpdatePhase.KINEMATICS)
        class KinematicsSystem(BaseSystem):
            ...
    """

    def decorator(cls):
        cls._phase = phase
        return cls

    return decorator


def get_system_phase(system: "BaseSystem") -> Optional[UpdatePhase]:
    """Get the phase a system is declared to run in."""
    return getattr(system, "_phase", None)
