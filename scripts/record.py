#!/usr/bin/env python3
"""
Kenai command-line recorder

Records from the default microphone until the auto-stop limit or Ctrl+C,
saves the WAV locally and uploads it to Supabase when configured.
"""

import argparse
import asyncio
import logging
import sys

from kenai.core.config import get_settings
from kenai.core.exceptions import MicrophonePermissionError
from kenai.services.recorder_service import RecorderService


async def record(max_seconds: float | None) -> int:
    """Run one recording and print the status log. Returns an exit code."""
    service = RecorderService.from_settings()
    max_ms = int(max_seconds * 1000) if max_seconds else None

    try:
        await service.start(max_ms)
    except MicrophonePermissionError as exc:
        print(f"Error: {exc.detail}")
        return 1

    print(f"Recording (auto-stop after {service.recorder.max_duration_ms / 1000:.0f}s, Ctrl+C to stop)...")
    try:
        await service.recorder.wait_done()
    except asyncio.CancelledError:
        await service.stop()

    await service.wait_finished()
    status = service.status()
    for line in status.status:
        print(f"  {line}")

    if status.artifact is None:
        return 1
    path = service.store.root / status.artifact.filename
    print(f"\nSaved: {path} ({status.artifact.size_bytes / 1024:.1f} KB)")
    if status.artifact.share_url:
        print(f"Share: {status.artifact.share_url}")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Record a WAV clip from the microphone",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--max-seconds",
        type=float,
        default=None,
        help=f"Auto-stop after this many seconds (default: {get_settings().recorder_max_duration_ms / 1000:.0f})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        code = asyncio.run(record(args.max_seconds))
    except KeyboardInterrupt:
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
