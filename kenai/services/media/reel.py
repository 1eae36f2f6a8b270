"""Concatenate video clips into a single reel with ffmpeg.

Clips are joined in the given order with ffmpeg's ``concat`` filter, which
re-encodes video and audio so clips from different sources line up. Clips
should share resolution and frame rate for a clean result.
"""

import logging
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from kenai.core.config import get_settings
from kenai.core.exceptions import ReelError

logger = logging.getLogger(__name__)


class ReelBuilder:
    """Build an MP4 reel from a list of clips.

    Args:
        ffmpeg_path: ffmpeg executable (falls back to settings).
        audio: Include each clip's audio stream in the concat.
    """

    def __init__(self, ffmpeg_path: str | None = None, audio: bool = True) -> None:
        self._ffmpeg = ffmpeg_path or get_settings().ffmpeg_path
        self._audio = audio

    def build_command(self, clips: Sequence[Path], output: Path) -> list[str]:
        """Return the ffmpeg argument list for joining ``clips`` into ``output``."""
        cmd = [self._ffmpeg, "-y", "-hide_banner"]
        for clip in clips:
            cmd += ["-i", str(clip)]

        n = len(clips)
        if self._audio:
            inputs = "".join(f"[{i}:v:0][{i}:a:0]" for i in range(n))
            graph = f"{inputs}concat=n={n}:v=1:a=1[v][a]"
            maps = ["-map", "[v]", "-map", "[a]"]
        else:
            inputs = "".join(f"[{i}:v:0]" for i in range(n))
            graph = f"{inputs}concat=n={n}:v=1:a=0[v]"
            maps = ["-map", "[v]"]

        cmd += ["-filter_complex", graph, *maps, str(output)]
        return cmd

    def build(self, clips: Sequence[str | Path], output: str | Path) -> Path:
        """Join ``clips`` into ``output`` and return the output path.

        Raises:
            ReelError: If no clips are given, a clip is missing, ffmpeg is not
                installed, or ffmpeg exits with an error.
        """
        clip_paths = [Path(c) for c in clips]
        if not clip_paths:
            raise ReelError("No clips given")
        for clip in clip_paths:
            if not clip.is_file():
                raise ReelError(f"Clip not found: {clip}")
        if shutil.which(self._ffmpeg) is None:
            raise ReelError(f"ffmpeg not found: {self._ffmpeg}")

        out = Path(output)
        out.parent.mkdir(parents=True, exist_ok=True)

        cmd = self.build_command(clip_paths, out)
        logger.info("Building reel from %d clip(s): %s", len(clip_paths), " ".join(cmd))
        try:
            subprocess.run(cmd, capture_output=True, text=True, check=True)
        except subprocess.CalledProcessError as exc:
            tail = (exc.stderr or "").strip().splitlines()[-5:]
            logger.error("ffmpeg failed with exit code %d", exc.returncode)
            raise ReelError(f"ffmpeg failed ({exc.returncode}): {' | '.join(tail)}") from exc

        logger.info("Reel written to %s", out)
        return out
