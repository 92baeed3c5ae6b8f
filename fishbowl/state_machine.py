"""State machine abstractions for explicit state management.

All valid states are enumerated, valid transitions are listed explicitly,
and an invalid transition fails fast with a clear message.

Usage:
    driver = StateMachine(DriverState.RUNNING, DRIVER_TRANSITIONS)
    driver.transition(DriverState.PAUSED)   # OK
    driver.transition(DriverState.STOPPED)  # OK
    driver.transition(DriverState.RUNNING)  # Raises InvalidTransitionError
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Generic, List, TypeVar

from fishbowl.exceptions import InvalidTransitionError

S = TypeVar("S", bound=Enum)


class DriverState(Enum):
    """Lifecycle of the simulation driver."""

    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"  # Terminal


DRIVER_TRANSITIONS: Dict[DriverState, List[DriverState]] = {
    DriverState.RUNNING: [DriverState.PAUSED, DriverState.STOPPED],
    DriverState.PAUSED: [DriverState.RUNNING, DriverState.STOPPED],
    DriverState.STOPPED: [],
}


@dataclass
class StateTransition(Generic[S]):
    """Record of a state transition for debugging."""

    from_state: S
    to_state: S
    frame: int
    reason: str = ""


class StateMachine(Generic[S]):
    """A generic state machine with explicit transition validation."""

    def __init__(
        self,
        initial_state: S,
        valid_transitions: Dict[S, List[S]],
        track_history: bool = False,
        max_history: int = 100,
    ) -> None:
        """Initialize the state machine.

        Args:
            initial_state: The starting state
            valid_transitions: Map of state -> list of valid target states
            track_history: Whether to record transition history
            max_history: Maximum number of transitions to keep in history
        """
        if initial_state not in valid_transitions:
            raise ValueError(
                f"Initial state {initial_state} not in valid_transitions. "
                f"Valid states: {list(valid_transitions.keys())}"
            )
        self._state = initial_state
        self._transitions = valid_transitions
        self._track_history = track_history
        self._max_history = max_history
        self._history: List[StateTransition[S]] = []

    @property
    def state(self) -> S:
        return self._state

    @property
    def history(self) -> List[StateTransition[S]]:
        """Get transition history (empty if tracking disabled)."""
        return self._history.copy()

    def can_transition(self, target: S) -> bool:
        return target in self._transitions.get(self._state, [])

    def transition(self, target: S, frame: int = 0, reason: str = "") -> S:
        """Transition to a new state.

        Raises:
            InvalidTransitionError: If the transition is not allowed
        """
        if not self.can_transition(target):
            valid_targets = self._transitions.get(self._state, [])
            raise InvalidTransitionError(
                f"Invalid transition: {self._state.name} -> {target.name}. "
                f"Valid targets from {self._state.name}: {[t.name for t in valid_targets]}"
            )

        old_state = self._state
        self._state = target

        if self._track_history:
            self._history.append(StateTransition(old_state, target, frame, reason))
            if len(self._history) > self._max_history:
                self._history = self._history[-self._max_history :]

        return target

    def __repr__(self) -> str:
        return f"StateMachine(state={self._state.name})"
