#!/usr/bin/env python3
"""
Run a Galton board for a number of frames and summarize the pile.

Usage:
    python scripts/run_board.py --frames 3600 --dt 0.0166667 --seed 42
    python scripts/run_board.py --frames 1800 --seed 7 --gif board.gif --every 3
    python scripts/run_board.py --frames 600 --jsonl run.jsonl

Without --dt the session is driven by the wall clock, one tick per loop
iteration, the way an interactive host would drive it.
"""

import argparse
import time

import numpy as np

from galton.analysis.metrics import pile_height, pile_histogram, pile_spread
from galton.board.session import BoardSession, FixedClock, WallClock
from galton.data.exporter import export_session
from galton.render.renderer import SceneRenderer
from galton.utils import setup_logging


def parse_args():
    parser = argparse.ArgumentParser(description="Simulate a Galton board")
    parser.add_argument("--frames", type=int, default=1800, help="Number of frames to run")
    parser.add_argument("--dt", type=float, default=None,
                        help="Fixed frame time in seconds (default: wall clock)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for drop jitter")
    parser.add_argument("--gif", type=str, default=None, help="Write an animated GIF here")
    parser.add_argument("--png", type=str, default=None, help="Write the final frame here")
    parser.add_argument("--every", type=int, default=2, help="Record every n-th frame for the GIF")
    parser.add_argument("--fps", type=int, default=30, help="GIF frames per second")
    parser.add_argument("--jsonl", type=str, default=None, help="Export every frame as JSONL")
    parser.add_argument("--bins", type=int, default=16, help="Histogram bins for the summary")
    parser.add_argument("--log-level", type=str, default="WARNING")
    parser.add_argument("--log-file", type=str, default=None)
    return parser.parse_args()


def print_summary(session: BoardSession, bins: int, elapsed: float):
    scene = session.scene
    counts, edges = pile_histogram(scene, session.floor, bins=bins)
    settled = int(counts.sum())
    spread = pile_spread(scene, session.floor)

    print(f"\n{'='*60}")
    print(f"Frames: {scene.frame}  simulated: {scene.time:.2f}s  wall: {elapsed:.2f}s")
    print(f"Balls spawned: {session.spawner.spawned}  settled: {settled}  "
          f"falling: {len(session.falling_balls())}")
    print(f"Pile height: {pile_height(scene, session.floor):.2f}")
    if spread is not None:
        print(f"Pile spread (std of x): {spread:.2f}")
    print(f"Registered interactions: {scene.interaction_count}")
    print(f"{'='*60}")

    peak = max(int(counts.max()), 1) if len(counts) else 1
    for count, lo, hi in zip(counts, edges[:-1], edges[1:]):
        bar = "#" * int(np.ceil(40 * count / peak)) if count else ""
        print(f"  [{lo:5.1f}, {hi:5.1f})  {count:4d}  {bar}")


def main():
    args = parse_args()
    setup_logging(args.log_level, args.log_file)

    clock = FixedClock(args.dt) if args.dt is not None else WallClock()
    renderer = None
    if args.gif or args.png:
        renderer = SceneRenderer(every=args.every)

    start = time.time()
    with BoardSession(clock=clock, renderer=renderer, seed=args.seed) as session:
        if args.jsonl:
            print(f"Exporting {args.frames} frames to {args.jsonl}...")
            export_session(session, args.frames, args.jsonl)
        else:
            session.run(args.frames, progress=True)
        elapsed = time.time() - start

        print_summary(session, args.bins, elapsed)

    if renderer is not None:
        if args.gif:
            print(f"Rendering {len(renderer.frames)} frames to {args.gif}...")
            renderer.save_gif(args.gif, fps=args.fps)
        if args.png:
            renderer.render_frame(args.png)
            print(f"Final frame saved: {args.png}")


if __name__ == "__main__":
    main()
