"""Line-table normalizers applied between parsing and printing."""

from .blocks import normalize_blocks
from .imports import collapse_imports

__all__ = ["collapse_imports", "normalize_blocks"]
