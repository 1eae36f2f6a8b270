"""Service layer: recording, storage, AI and media helpers."""
