#!/usr/bin/env python3
"""
Particle Swarm CLI Tool
=======================

Renders the trailing particle-swarm effect to a video file. Each named target
point gets its own swarm of particles that steer toward it, leave fading
trails and drift on when the target disappears.

Targets come from a synthetic fingertip source (five points on Lissajous
paths that periodically vanish), polled at its own cadence like a detector.

Usage:
    python -m swarmtrail --output swarm.mp4
    python -m swarmtrail --flocking --duration 20 --particles 150
    python -m swarmtrail -h (for help)
"""

import argparse
import logging
import sys

import cv2
import numpy as np
from moviepy import VideoClip

from swarmtrail.config import BlendMode, FlockingConfig, RenderConfig, SimulationConfig
from swarmtrail.constants import (
    DEFAULT_DURATION,
    DEFAULT_FPS,
    DEFAULT_RESOLUTION,
    PARTICLES_PER_TARGET,
    POLL_INTERVAL,
)
from swarmtrail.orchestrator import Orchestrator
from swarmtrail.swarm_renderer import SwarmRenderer
from swarmtrail.targets import FingertipOrbits, TargetFeed

logger = logging.getLogger("swarmtrail")


def build_parser():
    parser = argparse.ArgumentParser(
        description="Render a trailing particle-swarm video following moving target points."
    )
    parser.add_argument("--output", "-o", default="swarm.mp4", help="Path to output video file")
    parser.add_argument("--width", type=int, default=DEFAULT_RESOLUTION[0], help="Video width")
    parser.add_argument("--height", type=int, default=DEFAULT_RESOLUTION[1], help="Video height")
    parser.add_argument("--fps", type=int, default=DEFAULT_FPS, help="Frames per second")
    parser.add_argument(
        "--duration", type=float, default=DEFAULT_DURATION, help="Video duration in seconds"
    )
    parser.add_argument(
        "--particles", type=int, default=PARTICLES_PER_TARGET, help="Particles per target"
    )
    parser.add_argument("--flocking", action="store_true", help="Enable boid flocking")
    parser.add_argument(
        "--debug", action="store_true", help="Draw lines to targets and target markers"
    )
    parser.add_argument(
        "--alpha-blend", action="store_true", help="Alpha blend trails instead of adding light"
    )
    parser.add_argument("--no-mirror", action="store_true", help="Do not mirror the output")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible renders")
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=POLL_INTERVAL,
        help="Seconds between target detections",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main():
    args = build_parser().parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    # 1. Validation
    if args.width <= 0 or args.height <= 0:
        sys.exit(f"[!] Invalid resolution: {args.width}x{args.height}")
    if args.fps <= 0:
        sys.exit(f"[!] Invalid frame rate: {args.fps}")
    if args.duration <= 0:
        sys.exit(f"[!] Invalid duration: {args.duration}")

    try:
        config = SimulationConfig(
            flocking=FlockingConfig(enabled=args.flocking),
            render=RenderConfig(
                debug=args.debug,
                blend=BlendMode.ALPHA if args.alpha_blend else BlendMode.ADD,
                mirror=not args.no_mirror,
            ),
            particles_per_target=args.particles,
        )
        feed = TargetFeed(FingertipOrbits(args.width, args.height), args.poll_interval)
    except ValueError as e:
        sys.exit(f"[!] Invalid configuration: {e}")

    # 2. Setup Simulation
    orchestrator = Orchestrator(config, rng=np.random.default_rng(args.seed))
    renderer = SwarmRenderer(feed, orchestrator, args.width, args.height)

    logger.info(f"[+] Preparing render: {args.width}x{args.height} @ {args.fps}fps")
    logger.info(f"[+] Duration: {args.duration:.2f} seconds")
    if args.flocking:
        logger.info("[i] Flocking enabled")

    # 3. Create MoviePy Clip
    # The canvas is BGR for OpenCV, MoviePy expects RGB.
    def make_frame_wrapper(t):
        frame = renderer.make_frame(t)
        return cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

    video_clip = VideoClip(make_frame_wrapper, duration=args.duration)

    # 4. Export
    logger.info("[+] Rendering video... (This may take a while)")
    video_clip.write_videofile(
        args.output,
        fps=args.fps,
        codec="libx264",
        threads=4,
        preset="medium",
        logger="bar",
    )

    logger.info(f"[+] Done! {feed.polls} target polls, {len(orchestrator)} swarms. Saved to {args.output}")


if __name__ == "__main__":
    main()
