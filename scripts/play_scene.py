#!/usr/bin/env python3
"""Play an ambient scene on the default output device."""

import argparse
import logging
import sys
import time

from ambience.config import AmbienceConfig
from ambience.session import PlaybackSession
from ambience.sound.factory import PRESETS, Scene


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("scene", nargs="?", default=Scene.RAIN.value,
                        help="scene to play (see --list)")
    parser.add_argument("--seconds", type=float, default=30.0,
                        help="how long to play (default: 30)")
    parser.add_argument("--volume", type=float, default=0.5)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--block-size", type=int, default=2205)
    parser.add_argument("--list", action="store_true", help="list scenes and exit")
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    if args.list:
        for preset in PRESETS:
            print(f"  {preset.scene.value:<12} {preset.name:<12} {preset.description}")
        return 0

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(threadName)s] [%(levelname)s] - %(message)s",
        stream=sys.stdout,
    )

    scene = Scene.parse(args.scene)
    if scene is None:
        print(f"Unknown scene {args.scene!r}, falling back to white noise.")
        scene = Scene.WHITE_NOISE

    config = AmbienceConfig(
        block_size=args.block_size,
        default_scene=scene,
        volume=args.volume,
        seed=args.seed,
    )

    with PlaybackSession(config) as session:
        if not session.toggle_play():
            print("Could not open the audio device.")
            return 1

        print(f"Playing {scene.value} for {args.seconds:.0f}s... Press Ctrl+C to stop.")
        try:
            time.sleep(args.seconds)
        except KeyboardInterrupt:
            pass

    print("Stopped.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
