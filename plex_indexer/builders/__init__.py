"""
Tree builders for the Plex indexer.

Provides:
- Directory mode: index a real directory
- Path list mode: rebuild a tree from path strings, no filesystem access
- Tree diagram mode: parse box-drawing text (see plex_indexer.codec)
"""

from .directory import build_from_directory
from .paths import build_from_paths
from ..codec import parse_tree_text

__all__ = [
    "build_from_directory",
    "build_from_paths",
    "parse_tree_text",
]
