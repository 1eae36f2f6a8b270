"""Tests for the ffmpeg reel builder (subprocess mocked)."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from kenai.core.exceptions import ReelError
from kenai.services.media import ReelBuilder


@pytest.fixture
def clips(tmp_path):
    paths = []
    for name in ("a.mp4", "b.mp4"):
        path = tmp_path / name
        path.write_bytes(b"\x00")
        paths.append(path)
    return paths


class TestBuildCommand:
    def test_with_audio(self):
        cmd = ReelBuilder(ffmpeg_path="ffmpeg").build_command(
            [Path("a.mp4"), Path("b.mp4")], Path("out.mp4")
        )

        assert cmd[:3] == ["ffmpeg", "-y", "-hide_banner"]
        assert cmd[3:7] == ["-i", "a.mp4", "-i", "b.mp4"]
        graph = cmd[cmd.index("-filter_complex") + 1]
        assert graph == "[0:v:0][0:a:0][1:v:0][1:a:0]concat=n=2:v=1:a=1[v][a]"
        assert cmd[-5:] == ["-map", "[v]", "-map", "[a]", "out.mp4"]

    def test_without_audio(self):
        cmd = ReelBuilder(ffmpeg_path="ffmpeg", audio=False).build_command(
            [Path("a.mp4")], Path("out.mp4")
        )

        graph = cmd[cmd.index("-filter_complex") + 1]
        assert graph == "[0:v:0]concat=n=1:v=1:a=0[v]"
        assert "[a]" not in cmd


class TestBuild:
    def test_no_clips(self):
        with pytest.raises(ReelError, match="No clips"):
            ReelBuilder(ffmpeg_path="ffmpeg").build([], "out.mp4")

    def test_missing_clip(self, clips, tmp_path):
        with pytest.raises(ReelError, match="Clip not found"):
            ReelBuilder(ffmpeg_path="ffmpeg").build([*clips, tmp_path / "nope.mp4"], tmp_path / "o.mp4")

    def test_ffmpeg_missing(self, clips, tmp_path):
        with patch("kenai.services.media.reel.shutil.which", return_value=None):
            with pytest.raises(ReelError, match="ffmpeg not found"):
                ReelBuilder(ffmpeg_path="ffmpeg").build(clips, tmp_path / "o.mp4")

    def test_runs_ffmpeg(self, clips, tmp_path):
        output = tmp_path / "reels" / "reel.mp4"
        with (
            patch("kenai.services.media.reel.shutil.which", return_value="/usr/bin/ffmpeg"),
            patch("kenai.services.media.reel.subprocess.run") as run,
        ):
            result = ReelBuilder(ffmpeg_path="ffmpeg").build(clips, output)

        assert result == output
        assert output.parent.is_dir()
        args, kwargs = run.call_args
        assert args[0][-1] == str(output)
        assert kwargs == {"capture_output": True, "text": True, "check": True}

    def test_ffmpeg_failure(self, clips, tmp_path):
        error = subprocess.CalledProcessError(1, ["ffmpeg"], stderr="line1\nInvalid data found\n")
        with (
            patch("kenai.services.media.reel.shutil.which", return_value="/usr/bin/ffmpeg"),
            patch("kenai.services.media.reel.subprocess.run", side_effect=error),
        ):
            with pytest.raises(ReelError, match="Invalid data found"):
                ReelBuilder(ffmpeg_path="ffmpeg").build(clips, tmp_path / "o.mp4")
