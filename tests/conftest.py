"""Pytest configuration and fixtures for fishbowl tests."""

import random

import pytest

from fishbowl.config import ClockConfig, SimulationConfig
from fishbowl.entity_ids import IdGenerator
from fishbowl.simulation import FishbowlSimulation


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def ids():
    """A private id generator so tests see ids starting at 1."""
    return IdGenerator()


@pytest.fixture
def simulation(seeded_rng, ids):
    """A simulation with default configuration and deterministic spawning."""
    return FishbowlSimulation(rng=seeded_rng, ids=ids)


@pytest.fixture
def long_step_simulation(seeded_rng, ids):
    """A simulation whose clock allows whole-second steps."""
    config = SimulationConfig(clock=ClockConfig(max_dt=1.0))
    return FishbowlSimulation(config=config, rng=seeded_rng, ids=ids)


def _park_pellet(simulation, y, x_pct=50.0, size=6.0):
    """Spawn one motionless pellet at ``y`` and return it."""
    (pellet,) = simulation.create_falling_particles(
        1, x_range=(x_pct, x_pct), velocity_range=(0.0, 0.0), size=size, start_y=y
    )
    return pellet


@pytest.fixture
def park_pellet():
    """Helper that parks a motionless pellet in a simulation."""
    return _park_pellet
