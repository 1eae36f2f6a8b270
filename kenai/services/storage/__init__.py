"""
Storage module - local artifact files and Supabase object storage.
"""

from .artifacts import ArtifactStore
from .supabase import SupabaseStorage

__all__ = ["ArtifactStore", "SupabaseStorage"]
