"""Fishbowl: frame-rate independent pellets, bubbles and depth-seeking fish."""

from fishbowl.config import SimulationConfig
from fishbowl.entities import Bubble, Fish, Pellet
from fishbowl.events import EventBus, ParticleRemovedEvent, RemovalReason
from fishbowl.exceptions import (
    DuplicateAgentError,
    FishbowlError,
    InvalidBaselineError,
    InvalidRangeError,
    InvalidTransitionError,
    UnknownAgentError,
)
from fishbowl.math_utils import Rect
from fishbowl.simulation import FishbowlSimulation
from fishbowl.state_machine import DriverState

__all__ = [
    "Bubble",
    "DriverState",
    "DuplicateAgentError",
    "EventBus",
    "Fish",
    "FishbowlError",
    "FishbowlSimulation",
    "InvalidBaselineError",
    "InvalidRangeError",
    "InvalidTransitionError",
    "ParticleRemovedEvent",
    "Pellet",
    "Rect",
    "RemovalReason",
    "SimulationConfig",
    "UnknownAgentError",
]

__version__ = "0.1.0"
