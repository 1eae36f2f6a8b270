"""Shared utility functions for Kenai."""

import re
from datetime import datetime


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences wrapping JSON from LLM responses."""
    text = text.strip()
    if text.startswith("```"):
        text = re.sub(r"^```\w*\n?", "", text)
        text = re.sub(r"\n?```$", "", text)
    return text.strip()


def recording_filename(now: datetime | None = None, ext: str = "wav") -> str:
    """Build ``kenai-YYYYMMDD-HHMMSS.<ext>`` from the local clock."""
    now = now or datetime.now()
    return f"kenai-{now:%Y%m%d-%H%M%S}.{ext}"


def format_elapsed(ms: float) -> str:
    """Format milliseconds as ``mm:ss`` (minutes keep growing past 59)."""
    seconds = int(ms // 1000)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"
