#!/usr/bin/env python3
"""
Kenai reel builder

Joins two or more video clips (in order) into a single MP4 using ffmpeg.

Usage:
    python scripts/build_reel.py test_clips/clip1.mov test_clips/clip2.mov -o test_output/reel-test.mp4
"""

import argparse
import logging
import sys
from pathlib import Path

from kenai.core.exceptions import ReelError
from kenai.services.media import ReelBuilder


def main():
    parser = argparse.ArgumentParser(description="Concatenate clips into one reel with ffmpeg")
    parser.add_argument("clips", nargs="+", type=Path, help="Input clips, in playback order")
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=Path("test_output") / "reel-test.mp4",
        help="Output file (default: test_output/reel-test.mp4)",
    )
    parser.add_argument("--ffmpeg", default=None, help="Path to the ffmpeg executable")
    parser.add_argument("--no-audio", action="store_true", help="Drop audio streams")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    print("Building reel from clips:")
    for i, clip in enumerate(args.clips, start=1):
        print(f"  {i}. {clip}")
    print(f"Output: {args.output}")

    builder = ReelBuilder(ffmpeg_path=args.ffmpeg, audio=not args.no_audio)
    try:
        out = builder.build(args.clips, args.output)
    except ReelError as exc:
        print(f"\nError: {exc.detail}")
        sys.exit(1)

    print(f"\nDone! Reel created: {out}")


if __name__ == "__main__":
    main()
