"""Tests for fish depth seeking and relaxing."""

import math
import random

import pytest

from fishbowl.config import SeekConfig, TankGeometry
from fishbowl.entities import Fish, Pellet
from fishbowl.math_utils import Rect
from fishbowl.simulation import FishbowlSimulation
from fishbowl.systems.base import StepContext
from fishbowl.systems.seeking import SeekSystem, nearest_pellet

FAR_BOX = Rect(0, 0, 10, 10)  # Well away from pellets centered at x=320


def _seek_system(pellets, fish_list, depths=None):
    fish = {f.id: f for f in fish_list}
    depths = {} if depths is None else depths
    return SeekSystem(pellets, fish, depths), depths


def _context(dt, boxed_ids=(1,), tank=None):
    return StepContext(
        frame=1,
        dt=dt,
        tank=tank or TankGeometry(),
        agent_boxes={fish_id: FAR_BOX for fish_id in boxed_ids},
    )


class TestNearestPellet:
    """Target selection by vertical distance."""

    def test_picks_closest(self):
        pellets = [
            Pellet(id=1, x_pct=10, y=50, velocity=0, size=6),
            Pellet(id=2, x_pct=90, y=230, velocity=0, size=6),
            Pellet(id=3, x_pct=50, y=400, velocity=0, size=6),
        ]
        assert nearest_pellet(pellets, 240.0).id == 2

    def test_tie_goes_to_first(self):
        pellets = [
            Pellet(id=4, x_pct=10, y=100, velocity=0, size=6),
            Pellet(id=5, x_pct=90, y=300, velocity=0, size=6),
        ]
        assert nearest_pellet(pellets, 200.0).id == 4

    def test_no_pellets(self):
        assert nearest_pellet([], 100.0) is None


class TestSeekSystem:
    """Rate-limited steering toward pellets."""

    def test_lazy_initializes_to_baseline(self):
        system, depths = _seek_system([], [Fish(id=1, baseline=42.0)])
        assert depths == {}
        assert system.depth_of(Fish(id=1, baseline=42.0)) == 42.0
        assert depths == {1: 42.0}

    def test_step_is_rate_limited(self):
        pellets = [Pellet(id=1, x_pct=50, y=384, velocity=0, size=6)]  # 80% of 480
        system, depths = _seek_system(pellets, [Fish(id=1, baseline=50.0)])
        system.update(_context(0.05))
        assert depths[1] == pytest.approx(53.0)

    def test_small_delta_lands_exactly(self):
        pellets = [Pellet(id=1, x_pct=50, y=240, velocity=0, size=6)]  # 50%
        system, depths = _seek_system(pellets, [Fish(id=1, baseline=49.5)])
        system.update(_context(0.05))
        assert depths[1] == pytest.approx(50.0)

    def test_target_is_clamped(self):
        pellets = [Pellet(id=1, x_pct=50, y=-8, velocity=0, size=6)]
        system, depths = _seek_system(pellets, [Fish(id=1, baseline=18.0)])
        system.update(_context(1.0))
        assert depths[1] == pytest.approx(5.0)

    def test_fish_without_box_holds_depth(self):
        pellets = [Pellet(id=1, x_pct=50, y=384, velocity=0, size=6)]
        system, depths = _seek_system(
            pellets, [Fish(id=1, baseline=50.0), Fish(id=2, baseline=30.0)]
        )
        result = system.update(_context(0.05, boxed_ids=(1,)))
        assert depths[1] == pytest.approx(53.0)
        assert depths[2] == 30.0
        assert result.details["holding"] == 1

    def test_frame_rate_independent_seek(self):
        def run(dt, steps):
            pellets = [Pellet(id=1, x_pct=50, y=384, velocity=0, size=6)]
            system, depths = _seek_system(pellets, [Fish(id=1, baseline=50.0)])
            for _ in range(steps):
                system.update(_context(dt))
            return depths[1]

        assert run(0.25, 1) == pytest.approx(run(0.025, 10))

    def test_frame_rate_independent_relax(self):
        def run(dt, steps):
            system, depths = _seek_system([], [Fish(id=1, baseline=50.0)], {1: 80.0})
            for _ in range(steps):
                system.update(_context(dt))
            return depths[1]

        assert run(1.0, 1) == pytest.approx(60.0)
        assert run(0.1, 10) == pytest.approx(60.0)

    def test_relax_applies_without_box(self):
        system, depths = _seek_system([], [Fish(id=1, baseline=50.0)], {1: 80.0})
        system.update(_context(0.05, boxed_ids=()))
        assert depths[1] == pytest.approx(79.0)

    def test_custom_rates(self):
        pellets = [Pellet(id=1, x_pct=50, y=384, velocity=0, size=6)]
        system = SeekSystem(
            pellets, {1: Fish(id=1, baseline=50.0)}, {}, SeekConfig(seek_rate=10.0)
        )
        system.update(_context(0.5))
        assert system.depth_of(Fish(id=1, baseline=50.0)) == pytest.approx(55.0)


class TestSeekingInSimulation:
    """Seek and relax behaviour driven through the simulation."""

    def test_seek_converges_without_overshoot(self, simulation, park_pellet):
        simulation.register_agent(1, 50)
        park_pellet(simulation, 384.0)  # 80% of 480
        dt = 0.016
        steps = math.ceil(30 / (60 * dt))

        simulation.step(0, {1: FAR_BOX})
        previous = simulation.agent_coordinate(1)
        for i in range(1, steps + 1):
            simulation.step(i * 16, {1: FAR_BOX})
            depth = simulation.agent_coordinate(1)
            assert depth >= previous
            assert depth <= 80.0 + 1e-6
            previous = depth

        assert simulation.agent_coordinate(1) == pytest.approx(80.0, abs=0.5)

    def test_relax_after_last_pellet_eaten(self, simulation, park_pellet):
        simulation.register_agent(1, 50)
        park_pellet(simulation, 384.0)

        now = 0
        simulation.step(now, {1: FAR_BOX})
        for _ in range(12):
            now += 50
            simulation.step(now, {1: FAR_BOX})
        assert simulation.agent_coordinate(1) == pytest.approx(80.0)

        # This step's box covers the pellet, so it is eaten before seeking runs.
        now += 50
        simulation.step(now, {1: Rect(300, 380, 340, 400)})
        assert simulation.falling_particles() == []

        depths = [simulation.agent_coordinate(1)]
        for _ in range(5):
            now += 50
            simulation.step(now, {1: FAR_BOX})
            depths.append(simulation.agent_coordinate(1))

        assert depths[0] == pytest.approx(79.0)
        for before, after in zip(depths, depths[1:]):
            assert before - after == pytest.approx(20 * 0.05)
            assert after >= 50.0

    def test_boxes_only_count_for_their_step(self, simulation, park_pellet):
        simulation.register_agent(1, 50)
        park_pellet(simulation, 384.0)
        simulation.update_agent_box(1, FAR_BOX)
        simulation.step(0)
        simulation.step(50)
        assert simulation.agent_coordinate(1) == 50.0

    def test_depths_stay_clamped_under_stress(self, ids):
        rng = random.Random(99)
        sim = FishbowlSimulation(seed=5, ids=ids)
        for fish_id in range(1, 5):
            sim.register_agent(fish_id, rng.choice([18, 35, 60, 82]))

        now = 0.0
        for frame in range(600):
            if frame % 37 == 0:
                sim.feed(rng.randint(1, 6))
            if frame % 53 == 0:
                sim.create_falling_particles(2, start_y=rng.uniform(-50, 450))
            now += rng.choice([0.0, 5.0, 16.0, 33.0, 250.0, -40.0])
            boxes = {
                fish_id: Rect(0, 0, 20, 20) if fish_id % 2 else Rect(300, 0, 340, 480)
                for fish_id in sim.agent_ids()
            }
            sim.step(now, boxes)
            for fish_id in sim.agent_ids():
                assert 5.0 <= sim.agent_coordinate(fish_id) <= 95.0
