"""
Face analyzer module.

Local, deterministic skin-tone heuristics over decoded photos, with a
filename-based fallback when no pixel data is available.
"""

from .heuristics import analyze, analyze_from_filename
from .local import analyze_photo

__all__ = ["analyze", "analyze_from_filename", "analyze_photo"]
