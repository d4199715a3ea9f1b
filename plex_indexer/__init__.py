"""
Plex Indexer
============

Indexes a media folder (from disk, a tree diagram or a path list) and
builds a Plex friendly library of symbolic links grouped into seasons or
chapters.
"""

__version__ = "0.1.0"

from .tree import Node
from .builders import build_from_directory, build_from_paths
from .codec import parse_tree_text, format_tree_text
from .grouping import MediaGroup, MediaItem, collect_media_files, group_media_files, group_paths
from .linker import generate_link_farm, SEASON, CHAPTER
from .errors import IndexerError, InputError, ParseError, FilesystemError
from .utils import DEFAULT_SUFFIXES, save_json, load_json

__all__ = [
    "Node",
    "build_from_directory",
    "build_from_paths",
    "parse_tree_text",
    "format_tree_text",
    "MediaGroup",
    "MediaItem",
    "collect_media_files",
    "group_media_files",
    "group_paths",
    "generate_link_farm",
    "SEASON",
    "CHAPTER",
    "IndexerError",
    "InputError",
    "ParseError",
    "FilesystemError",
    "DEFAULT_SUFFIXES",
    "save_json",
    "load_json",
]
