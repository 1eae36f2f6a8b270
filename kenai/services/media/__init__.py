"""
Media module - video helpers built on the ffmpeg command-line tool.
"""

from .reel import ReelBuilder

__all__ = ["ReelBuilder"]
