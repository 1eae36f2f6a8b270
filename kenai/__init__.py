"""Kenai Recorder - voice capture, WAV packing and AI summaries."""

__version__ = "0.1.0"
