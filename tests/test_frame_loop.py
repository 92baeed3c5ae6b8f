"""Tests for the headless frame loop."""

import pytest

from fishbowl.frame_loop import FrameLoop, VirtualTimeSource
from fishbowl.math_utils import Rect


class TestVirtualTimeSource:
    def test_advances_one_frame_per_call(self):
        source = VirtualTimeSource(fps=50, start=100.0)
        assert [source(), source(), source()] == [100.0, 120.0, 140.0]


class TestFrameLoop:
    """Scheduling, box supply and cancellation."""

    def test_runs_requested_frames(self, simulation):
        loop = FrameLoop(simulation, fps=60)
        assert loop.run(30) == 30
        assert simulation.frame == 30

    def test_steps_use_frame_delta(self, simulation):
        simulation.create_falling_particles(1, velocity_range=(120.0, 120.0), start_y=0.0)
        FrameLoop(simulation, fps=50).run(3)
        # First step has no previous timestamp, then two 20ms steps.
        assert simulation.falling_particles()[0]["y"] == pytest.approx(4.8)

    def test_box_provider_feeds_each_step(self, simulation, park_pellet):
        simulation.register_agent(1, 50)
        park_pellet(simulation, 100.0)
        calls = []

        def provider(sim, now):
            calls.append(now)
            return {1: Rect(300, 90, 340, 120)}

        FrameLoop(simulation, box_provider=provider).run(2)
        assert len(calls) == 2
        assert simulation.get_debug_info()["eaten"] == 1

    def test_stop_cancels_loop(self, simulation):
        loop = FrameLoop(simulation)

        def on_frame(sim, frame):
            if frame == 3:
                sim.stop()

        assert loop.run(100, on_frame=on_frame) == 3
        assert loop.cancelled
        assert loop.run(10) == 0

    def test_realtime_pacing_sleeps(self, simulation):
        sleeps = []
        FrameLoop(simulation, fps=10, realtime=True, sleep=sleeps.append).run(2)
        assert len(sleeps) == 2
        assert all(0 < s <= 0.1 for s in sleeps)

    def test_realtime_defaults_to_wall_clock(self, simulation, monkeypatch):
        monkeypatch.setattr("fishbowl.frame_loop.time.monotonic", lambda: 10.0)
        stamps = []

        def provider(sim, now):
            stamps.append(now)
            return {}

        FrameLoop(simulation, realtime=True, box_provider=provider, sleep=lambda s: None).run(1)
        assert stamps == [pytest.approx(10000.0)]
