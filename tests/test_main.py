"""Tests for the headless command-line runner."""

import logging

import orjson
import pytest

from fishbowl.logging_config import configure_logging, resolve_log_level
from fishbowl.simulation import FishbowlSimulation
from main import run_headless, swim_layout


class TestHeadlessRun:
    def test_run_reports_totals(self):
        info = run_headless(frames=240, fps=60, fish=3, feed_every=60, bubbles_every=80, seed=42)
        assert info["frame"] == 240
        assert info["fish"] == 3
        assert info["state"] == "stopped"
        assert info["spawned"] >= 5
        assert info["spawned"] >= info["eaten"] + info["floor"] + info["surfaced"]

    def test_export_frames(self, tmp_path):
        path = tmp_path / "frames.jsonl"
        run_headless(frames=20, fps=60, fish=1, feed_every=0, bubbles_every=0, seed=1, export_frames=str(path))
        lines = path.read_bytes().splitlines()
        assert len(lines) == 20
        assert orjson.loads(lines[-1])["frame"] == 20


class TestSwimLayout:
    def test_boxes_centered_on_depth(self, ids):
        sim = FishbowlSimulation(seed=0, ids=ids)
        sim.register_agent(1, 50)
        box = swim_layout(sim, 0.0)[1]
        assert (box.top + box.bottom) / 2 == 240.0
        assert 0 <= box.left and box.right <= sim.tank.width + box.width


class TestLoggingConfig:
    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("FISHBOWL_LOG_LEVEL", "warning")
        logger = configure_logging()
        try:
            assert logger.name == "fishbowl"
            assert logger.level == logging.WARNING
        finally:
            logger.setLevel(logging.NOTSET)

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("FISHBOWL_LOG_LEVEL", "warning")
        logger = configure_logging(level="debug")
        try:
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(logging.NOTSET)

    def test_defaults_to_info(self, monkeypatch):
        monkeypatch.delenv("FISHBOWL_LOG_LEVEL", raising=False)
        assert resolve_log_level() == logging.INFO

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError, match="LOUD"):
            resolve_log_level("loud")
