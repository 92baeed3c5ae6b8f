"""Per-step simulation systems."""

from fishbowl.systems.base import BaseSystem, StepContext, SystemResult
from fishbowl.systems.kinematics import KinematicsSystem
from fishbowl.systems.seeking import SeekSystem

__all__ = [
    "BaseSystem",
    "KinematicsSystem",
    "SeekSystem",
    "StepContext",
    "SystemResult",
]
