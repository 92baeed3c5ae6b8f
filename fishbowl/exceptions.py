"""Fishbowl exception hierarchy.

Every failure the simulation surfaces to a caller derives from
``FishbowlError`` so hosts can catch the whole family in one place.
None of these are fatal: the simulation state is left untouched by the
call that raised.
"""


class FishbowlError(Exception):
    """Root of all fishbowl domain exceptions."""


class SimulationError(FishbowlError):
    """Errors raised by the simulation driver or its systems."""


class InvalidRangeError(FishbowlError, ValueError):
    """A spawn range has ``min > max`` (or a spawn count is negative)."""

    def __init__(self, name: str, low: float, high: float) -> None:
        super().__init__(f"Invalid {name}: min {low!r} is greater than max {high!r}")
        self.name = name
        self.low = low
        self.high = high


class UnknownAgentError(FishbowlError, KeyError):
    """An operation referenced an agent id that was never registered."""

    def __init__(self, agent_id: int) -> None:
        super().__init__(agent_id)
        self.agent_id = agent_id

    def __str__(self) -> str:
        return f"Unknown agent id {self.agent_id}"


class DuplicateAgentError(FishbowlError):
    """An agent id was registered twice."""


class InvalidTransitionError(SimulationError):
    """The driver was asked to make a state change its state machine forbids."""


class InvalidBaselineError(FishbowlError, ValueError):
    """A fish baseline lies outside the depth range seeking may use."""
