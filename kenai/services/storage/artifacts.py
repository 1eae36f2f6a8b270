"""Local copies of finished recordings for playback and download."""

import logging
from pathlib import Path

from kenai.core.exceptions import RecordingNotFoundError

logger = logging.getLogger(__name__)


class ArtifactStore:
    """Stores WAV artifacts as files in a single directory.

    Args:
        root: Directory holding the recordings (created on first save).
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def save(self, filename: str, data: bytes) -> Path:
        """Write an artifact and return its path."""
        path = self._resolve(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.info("Saved %s (%d bytes)", path, len(data))
        return path

    def path_for(self, filename: str) -> Path:
        """Return the path of an existing artifact.

        Raises:
            RecordingNotFoundError: If the name is invalid or no such file exists.
        """
        path = self._resolve(filename)
        if not path.is_file():
            raise RecordingNotFoundError(filename)
        return path

    def _resolve(self, filename: str) -> Path:
        root = self._root.resolve()
        path = (root / filename).resolve()
        # Only plain names directly inside the recordings directory
        if path.parent != root or not filename or filename != path.name:
            raise RecordingNotFoundError(filename)
        return path
