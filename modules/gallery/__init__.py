"""
Gallery module.

Storage contract for finished characters and an in-memory implementation.
"""

from .store import GalleryRecord, GalleryStore, InMemoryGallery

__all__ = ["GalleryRecord", "GalleryStore", "InMemoryGallery"]
