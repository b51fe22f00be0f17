#!/usr/bin/env python3
"""
Repetitive Motion - Synthetic Stream Demo
Feeds a generated wrist trajectory through the real-time controller and
prints each analysis snapshot. No camera required.

Usage: python demo_synthetic.py --frequency 2.2 --hands left
"""

import argparse
import asyncio
import logging

import numpy as np

from Motion_Analysis.core.config import DetectorConfig
from Motion_Analysis.core.realtime_controller import RealTimeController
from Motion_Analysis.core.session_aggregator import SessionAnalysis


def parse_args():
    parser = argparse.ArgumentParser(description="Repetitive motion synthetic demo")
    parser.add_argument("--frequency", "-f", type=float, default=2.2, help="Oscillation frequency (Hz)")
    parser.add_argument("--amplitude", "-a", type=float, default=10.0, help="Vertical amplitude")
    parser.add_argument("--noise", "-n", type=float, default=0.5, help="Uniform noise half-width")
    parser.add_argument("--duration", "-d", type=float, default=6.0, help="Stream length (s)")
    parser.add_argument("--fps", type=float, default=25.0, help="Frame rate (Hz)")
    parser.add_argument("--hands", choices=["left", "right", "both"], default="both")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser.parse_args()


def print_snapshot(session: SessionAnalysis):
    summary = session.summary
    if summary is None:
        print("   (no wrist data)")
        return
    line = f"   score={summary.overall_score:.3f}  {summary.classification.value:<6}  wrists={summary.wrist_count}"
    for name, wrist in (("L", session.left_wrist), ("R", session.right_wrist)):
        if wrist is not None and wrist.y_axis.dominant_frequency is not None:
            line += f"  {name}:{wrist.y_axis.dominant_frequency:.2f}Hz"
    print(line)


async def stream(args):
    config = DetectorConfig(frame_rate_hz=args.fps)
    controller = RealTimeController(config, on_analysis=print_snapshot)
    rng = np.random.default_rng(args.seed)
    hands = {"left": ("left",), "right": ("right",), "both": ("left", "right")}[args.hands]

    controller.start()
    try:
        for i in range(int(args.duration * args.fps)):
            t = i / args.fps
            y = args.amplitude * np.sin(2 * np.pi * args.frequency * t)
            frame = {}
            for hand in hands:
                frame[hand] = {
                    'x': 0.0,
                    'y': y + rng.uniform(-args.noise, args.noise),
                    'z': rng.uniform(-args.noise, args.noise),
                    'confidence': 1.0
                }
            controller.add_frame(frame.get("left"), frame.get("right"), timestamp=t * 1000)
            await asyncio.sleep(1 / args.fps)
    finally:
        controller.stop()

    stats = controller.detection_stats()
    print(f"\nRepetitive motion: {stats.has_repetitive_motion}  severity: {stats.severity.value}")
    for rec in stats.recommendations:
        print(f"   - {rec}")


def main():
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    print("\n" + "=" * 50)
    print("  Repetitive Motion Screening - Synthetic Stream")
    print("=" * 50 + "\n")
    asyncio.run(stream(args))


if __name__ == "__main__":
    main()
