"""Render payloads: one frame of fishbowl state for a renderer.

The simulation's query methods already return plain dicts; these models
give a renderer (or a recorded run) a validated, versionable frame shape
and a fast JSON encoding.
"""

from typing import Any, Dict, List

import orjson
from pydantic import BaseModel

from fishbowl.simulation import FishbowlSimulation


class PelletData(BaseModel):
    """A sinking food pellet."""

    id: int
    x_pct: float
    y: float
    size: float


class BubbleData(BaseModel):
    """A rising bubble."""

    id: int
    x_pct: float
    y: float
    size: float
    opacity: float


class FishData(BaseModel):
    """A fish's live depth and home depth, both in percent of bowl height."""

    id: int
    depth: float
    baseline: float


class FishbowlState(BaseModel):
    """Everything a renderer needs to draw one frame."""

    frame: int
    state: str
    width: float
    height: float
    floor_y: float
    pellets: List[PelletData]
    bubbles: List[BubbleData]
    fish: List[FishData]

    def to_json_bytes(self) -> bytes:
        return orjson.dumps(self.model_dump())


def build_state(simulation: FishbowlSimulation) -> FishbowlState:
    """Capture the simulation's current frame."""
    tank = simulation.tank
    return FishbowlState(
        frame=simulation.frame,
        state=simulation.state.value,
        width=tank.width,
        height=tank.height,
        floor_y=tank.floor_y,
        pellets=[PelletData(**data) for data in simulation.falling_particles()],
        bubbles=[BubbleData(**data) for data in simulation.rising_particles()],
        fish=[
            FishData(id=fish.id, depth=depth, baseline=fish.baseline)
            for fish, depth in simulation.agents()
        ],
    )


def state_from_json(payload: bytes) -> FishbowlState:
    """Decode a frame written by ``FishbowlState.to_json_bytes``."""
    data: Dict[str, Any] = orjson.loads(payload)
    return FishbowlState.model_validate(data)
