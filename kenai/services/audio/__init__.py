"""
Audio module - microphone capture, recording state machine and WAV packing.
"""

from .capture import CaptureSource, create_capture_source
from .recorder import Artifact, Recorder, Session
from .wav import encode_wav, interleave, quantize

__all__ = [
    "Artifact",
    "CaptureSource",
    "Recorder",
    "Session",
    "create_capture_source",
    "encode_wav",
    "interleave",
    "quantize",
]
