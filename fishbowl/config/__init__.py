"""Configuration constants and dataclasses for the fishbowl simulation."""

from fishbowl.config.simulation_config import (
    BubbleSpawnConfig,
    ClockConfig,
    PelletSpawnConfig,
    SeekConfig,
    SimulationConfig,
    TankGeometry,
)

__all__ = [
    "BubbleSpawnConfig",
    "ClockConfig",
    "PelletSpawnConfig",
    "SeekConfig",
    "SimulationConfig",
    "TankGeometry",
]
