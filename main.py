"""Headless runner for the fishbowl simulation.

Drives a simulation with a virtual frame clock, feeding and blowing
bubbles on a schedule, and logs what happened. Optionally records every
frame as JSON lines for an external renderer to replay.
"""

import argparse
import logging
import math
import sys
from typing import Dict, Optional

from fishbowl.config.tank import FRAME_RATE
from fishbowl.frame_loop import FrameLoop, VirtualTimeSource
from fishbowl.logging_config import configure_logging
from fishbowl.math_utils import Rect
from fishbowl.simulation import FishbowlSimulation
from fishbowl.snapshots import build_state

logger = logging.getLogger(__name__)

SEPARATOR_WIDTH = 60

# On-screen fish sprite footprint in px (23x16 sprite drawn at ~3.5x).
FISH_BOX_WIDTH = 80.0
FISH_BOX_HEIGHT = 56.0
SWIM_PERIOD_RANGE = (8, 14)  # seconds per lap, varies by fish id


def swim_layout(simulation: FishbowlSimulation, now: float) -> Dict[int, Rect]:
    """Stand-in for a renderer's layout pass.

    Fish swim side to side on a sine lap and sit vertically at their
    current depth. Returns fresh boxes for every registered fish.
    """
    tank = simulation.tank
    low, high = SWIM_PERIOD_RANGE
    boxes: Dict[int, Rect] = {}
    for fish, depth in simulation.agents():
        period = low + fish.id % (high - low + 1)
        phase = 2 * math.pi * (now / 1000.0) / period
        center_x = tank.width * (0.5 + 0.4 * math.sin(phase + fish.id))
        center_y = tank.height * depth / 100.0
        boxes[fish.id] = Rect(
            center_x - FISH_BOX_WIDTH / 2,
            center_y - FISH_BOX_HEIGHT / 2,
            center_x + FISH_BOX_WIDTH / 2,
            center_y + FISH_BOX_HEIGHT / 2,
        )
    return boxes


def run_headless(
    frames: int,
    fps: int,
    fish: int,
    feed_every: int,
    bubbles_every: int,
    seed: Optional[int] = None,
    export_frames: Optional[str] = None,
) -> Dict[str, object]:
    """Run the simulation headless and return its final debug info."""
    simulation = FishbowlSimulation(seed=seed)
    for _ in range(fish):
        simulation.add_random_agent()

    loop = FrameLoop(simulation, fps=fps, time_source=VirtualTimeSource(fps), box_provider=swim_layout)
    export = open(export_frames, "wb") if export_frames else None

    def on_frame(sim: FishbowlSimulation, frame: int) -> None:
        if feed_every and frame % feed_every == 0:
            sim.feed()
        if bubbles_every and frame % bubbles_every == 0:
            sim.blow_bubbles()
        if export is not None:
            export.write(build_state(sim).to_json_bytes() + b"\n")

    try:
        simulation.feed()
        loop.run(frames, on_frame=on_frame)
    finally:
        simulation.stop()
        if export is not None:
            export.close()

    return simulation.get_debug_info()


def main() -> None:
    """Parse command-line arguments and run the simulation."""
    parser = argparse.ArgumentParser(
        description="Fishbowl pellet, bubble and fish simulation (headless)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Ten simulated seconds at 60 fps with three fish
  python main.py --frames 600 --fish 3

  # Reproducible run recorded for a renderer
  python main.py --seed 42 --export-frames frames.jsonl
        """,
    )
    parser.add_argument("--frames", type=int, default=600, help="Frames to simulate (default: 600)")
    parser.add_argument(
        "--fps", type=int, default=FRAME_RATE, help=f"Frame rate (default: {FRAME_RATE})"
    )
    parser.add_argument("--fish", type=int, default=2, help="Number of fish (default: 2)")
    parser.add_argument(
        "--feed-every", type=int, default=180, help="Feed every N frames, 0 to disable (default: 180)"
    )
    parser.add_argument(
        "--bubbles-every",
        type=int,
        default=240,
        help="Blow bubbles every N frames, 0 to disable (default: 240)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )
    parser.add_argument(
        "--export-frames",
        type=str,
        default=None,
        metavar="FILENAME",
        help="Write one JSON snapshot per frame (JSON lines)",
    )
    parser.add_argument("--log-level", type=str, default=None, help="Log level (default: INFO)")

    args = parser.parse_args()
    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))

    if args.frames < 0 or args.fps <= 0 or args.fish < 0:
        logger.error("--frames and --fish must be >= 0 and --fps must be > 0")
        sys.exit(2)

    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("FISHBOWL SIMULATION - HEADLESS")
    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("Configuration: %d frames at %d fps, %d fish", args.frames, args.fps, args.fish)
    if args.export_frames:
        logger.info("Frames will be exported to: %s", args.export_frames)

    info = run_headless(
        args.frames,
        args.fps,
        args.fish,
        args.feed_every,
        args.bubbles_every,
        seed=args.seed,
        export_frames=args.export_frames,
    )

    logger.info("Frames run: %d", info["frame"])
    logger.info(
        "Particles: spawned=%d eaten=%d floor=%d surfaced=%d",
        info["spawned"],
        info["eaten"],
        info["floor"],
        info["surfaced"],
    )
    logger.info("Remaining: %d pellets, %d bubbles", info["pellets"], info["bubbles"])


if __name__ == "__main__":
    main()
