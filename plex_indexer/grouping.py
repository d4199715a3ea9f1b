"""
Grouping of media files into ordered buckets.

Every media file is grouped by the name of the directory that contains it.
Groups are numbered in lexical order of their names and files inside a
group in lexical order of their file names; both ordinals start at 1.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable

from .tree import Node
from .utils import DEFAULT_SUFFIXES, has_suffix


@dataclass(frozen=True)
class MediaItem:
    """A media file and its position within its group."""
    path: str
    filename: str
    ordinal: int


@dataclass(frozen=True)
class MediaGroup:
    """Files sharing one containing directory name."""
    key: str
    ordinal: int
    items: tuple[MediaItem, ...]


def group_key(path: str) -> str:
    """
    Name of the directory directly containing path.

    Example: "/lib/one/a.mp4" -> "one". A bare file name has an empty key.
    """
    parts = path.rstrip("/").split("/")
    return parts[-2] if len(parts) > 1 else ""


def collect_media_files(
    node: Node,
    suffixes: Iterable[str] = DEFAULT_SUFFIXES,
    root_path: str | None = None
) -> list[str]:
    """
    Flatten a tree into the paths of its media files, depth-first.

    Args:
        node: Root of the tree.
        suffixes: Recognized media suffixes.
        root_path: Path the root node stands for (see Node.iter_file_paths).

    Returns:
        Resolved paths of files whose name ends with a recognized suffix.
    """
    suffixes = tuple(suffixes)
    return [
        path for path in node.iter_file_paths(root_path)
        if has_suffix(path.rsplit("/", 1)[-1], suffixes)
    ]


def group_paths(paths: Iterable[str]) -> list[MediaGroup]:
    """
    Partition file paths into ordered groups.

    Args:
        paths: File paths.

    Returns:
        Groups sorted by key, each with its files sorted by file name.
    """
    members: dict[str, list[str]] = defaultdict(list)
    for path in paths:
        members[group_key(path)].append(path)

    groups = []
    for group_ordinal, key in enumerate(sorted(members), 1):
        # Full path breaks ties between equal file names
        ordered = sorted(members[key], key=lambda p: (p.rsplit("/", 1)[-1], p))
        items = tuple(
            MediaItem(path=p, filename=p.rsplit("/", 1)[-1], ordinal=item_ordinal)
            for item_ordinal, p in enumerate(ordered, 1)
        )
        groups.append(MediaGroup(key=key, ordinal=group_ordinal, items=items))

    return groups


def group_media_files(
    node: Node,
    suffixes: Iterable[str] = DEFAULT_SUFFIXES,
    root_path: str | None = None
) -> list[MediaGroup]:
    """Collect the media files of a tree and group them (see group_paths)."""
    return group_paths(collect_media_files(node, suffixes, root_path))
