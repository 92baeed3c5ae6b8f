"""Base class and result type for simulation systems.

Design Principles:
- Each system has ONE responsibility
- Systems are initialized with their dependencies
- Systems return results describing what they did (for debugging/metrics)

A system never reaches back into the driver for inputs that change per
step. Everything it needs for one step arrives in a ``StepContext``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from fishbowl.config.simulation_config import TankGeometry
from fishbowl.math_utils import Rect

__all__ = [
    "BaseSystem",
    "StepContext",
    "SystemResult",
]

if TYPE_CHECKING:
    from fishbowl.update_phases import UpdatePhase


@dataclass(frozen=True)
class StepContext:
    """Inputs shared by every system during one step.

    Attributes:
        frame: Step counter (steps that actually ran, not paused ones)
        dt: Clamped delta time in seconds
        tank: Bowl geometry for this step
        agent_boxes: Fish id -> bounding box snapshot, valid for this step only
    """

    frame: int
    dt: float
    tank: TankGeometry
    agent_boxes: Mapping[int, Rect] = field(default_factory=dict)


@dataclass
class SystemResult:
    """Result of a system update.

    Attributes:
        entities_affected: Number of entities that were modified
        entities_spawned: Number of new entities created
        entities_removed: Number of entities removed
        skipped: Whether the update was skipped (system disabled or paused)
        details: System-specific details (e.g. {"eaten": 2, "floor": 1})
    """

    entities_affected: int = 0
    entities_spawned: int = 0
    entities_removed: int = 0
    skipped: bool = False
    details: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def skipped_result() -> "SystemResult":
        """Create a result for when the update was skipped."""
        return SystemResult(skipped=True)

    @staticmethod
    def empty() -> "SystemResult":
        """Create an empty result (nothing happened)."""
        return SystemResult()

    def __add__(self, other: "SystemResult") -> "SystemResult":
        """Combine two results (useful for aggregating systems or steps)."""
        if other.skipped:
            return self
        if self.skipped:
            return other

        combined_details = {**self.details}
        for key, value in other.details.items():
            if key in combined_details and isinstance(value, (int, float)):
                combined_details[key] = combined_details[key] + value
            else:
                combined_details[key] = value

        return SystemResult(
            entities_affected=self.entities_affected + other.entities_affected,
            entities_spawned=self.entities_spawned + other.entities_spawned,
            entities_removed=self.entities_removed + other.entities_removed,
            skipped=False,
            details=combined_details,
        )


class BaseSystem(ABC):
    """Abstract base class for all simulation systems.

    Subclasses implement ``_do_update``; ``update`` handles update counting.
    """

    # Class-level phase declaration (set by @runs_in_phase decorator)
    _phase: Optional["UpdatePhase"] = None

    def __init__(self, name: str) -> None:
        self._name = name
        self._update_count = 0

    @property
    def name(self) -> str:
        """Human-readable name for debugging and logging."""
        return self._name

    @property
    def update_count(self) -> int:
        """Number of times update() ran the system."""
        return self._update_count

    @property
    def phase(self) -> Optional["UpdatePhase"]:
        """The update phase this system runs in."""
        return self._phase

    def update(self, context: StepContext) -> SystemResult:
        """Perform the system's per-step logic.

        Args:
            context: Inputs for this step

        Returns:
            SystemResult describing what the system did
        """
        result = self._do_update(context)
        self._update_count += 1
        return result

    @abstractmethod
    def _do_update(self, context: StepContext) -> SystemResult:
        """Implement system-specific update logic."""

    def get_debug_info(self) -> Dict[str, Any]:
        """Return debug information about this system's state."""
        return {
            "name": self._name,
            "update_count": self._update_count,
            "phase": self._phase.name if self._phase else None,
        }

    def __repr__(self) -> str:
        phase_str = f", phase={self._phase.name}" if self._phase else ""
        return f"{self.__class__.__name__}(name={self._name!r}{phase_str})"
