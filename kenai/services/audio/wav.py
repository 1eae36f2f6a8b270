"""WAV packing for captured float32 audio.

Turns per-channel lists of float32 chunks into a canonical 44-byte-header
RIFF/WAVE file holding 16-bit signed little-endian PCM.
"""

import io
import wave
from collections.abc import Sequence

import numpy as np

from kenai.core.exceptions import EncodingError

SAMPLE_WIDTH = 2  # bytes per 16-bit sample
HEADER_SIZE = 44

ChannelBuffers = Sequence[Sequence[np.ndarray]]


def _validate(channel_buffers: ChannelBuffers, channels: int) -> None:
    if channels < 1:
        raise EncodingError(f"Invalid channel count: {channels}")
    if len(channel_buffers) < channels:
        raise EncodingError(
            f"Expected {channels} channel buffer(s), got {len(channel_buffers)}"
        )
    first = channel_buffers[0]
    if not first:
        raise EncodingError("No audio captured")
    for c in range(channels):
        chunks = channel_buffers[c]
        if len(chunks) != len(first):
            raise EncodingError(
                f"Channel {c} has {len(chunks)} chunks, channel 0 has {len(first)}"
            )
        for b, chunk in enumerate(chunks):
            if np.ndim(chunk) != 1:
                raise EncodingError(f"Chunk {b} of channel {c} is not one-dimensional")
            if len(chunk) != len(first[b]):
                raise EncodingError(f"Chunk {b} length differs between channels 0 and {c}")


def frame_count(channel_buffers: ChannelBuffers) -> int:
    """Total number of sample frames, counted on channel 0."""
    if not channel_buffers:
        return 0
    return sum(len(chunk) for chunk in channel_buffers[0])


def interleave(channel_buffers: ChannelBuffers, channels: int = 1) -> np.ndarray:
    """Flatten per-channel chunk lists into one interleaved float32 array.

    Sample ``s`` of chunk ``b`` on channel ``c`` lands at
    ``(offset_b + s) * channels + c`` where ``offset_b`` is the number of
    frames in the chunks before ``b``.

    Raises:
        EncodingError: If the buffers are empty or inconsistent across channels.
    """
    _validate(channel_buffers, channels)
    total = frame_count(channel_buffers)
    out = np.empty(total * channels, dtype=np.float32)
    offset = 0
    for b, chunk in enumerate(channel_buffers[0]):
        n = len(chunk)
        for c in range(channels):
            out[offset * channels + c : (offset + n) * channels : channels] = channel_buffers[c][b]
        offset += n
    return out


def quantize(samples: np.ndarray) -> np.ndarray:
    """Convert float samples to int16 PCM values.

    Samples are clamped to [-1.0, 1.0] (NaN becomes 0); negative values are
    scaled by 32768 and the rest by 32767, then truncated toward zero.
    """
    x = np.nan_to_num(np.asarray(samples, dtype=np.float64), nan=0.0, posinf=1.0, neginf=-1.0)
    x = np.clip(x, -1.0, 1.0)
    scaled = np.where(x < 0, x * 32768.0, x * 32767.0)
    return np.trunc(scaled).astype(np.int16)


def encode_wav(channel_buffers: ChannelBuffers, sample_rate: int, channels: int = 1) -> bytes:
    """Pack captured buffers into a complete WAV file.

    Args:
        channel_buffers: One list of float32 chunks per channel, in arrival order.
        sample_rate: Capture rate in Hz, written to the header as-is.
        channels: Number of channels to pack.

    Returns:
        The 44-byte RIFF/WAVE header followed by the PCM data.

    Raises:
        EncodingError: If the buffers are malformed or empty.
    """
    if sample_rate <= 0:
        raise EncodingError(f"Invalid sample rate: {sample_rate}")
    pcm = quantize(interleave(channel_buffers, channels)).tobytes()

    out = io.BytesIO()
    with wave.open(out, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(SAMPLE_WIDTH)
        wf.setframerate(sample_rate)
        wf.writeframes(pcm)
    return out.getvalue()
