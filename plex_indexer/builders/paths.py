"""
Rebuild a Node tree from a flat list of path strings.

No filesystem access happens here: the list is assumed to describe things
that exist (files and directories) under one common root, and the shortest
string is taken as that root.
"""

from typing import Iterable

from ..errors import InputError
from ..tree import Node

# (original path, remaining segments, ends with a separator)
_Entry = tuple[str, list[str], bool]


def _join(parent: str, name: str) -> str:
    return f"{parent.rstrip('/')}/{name}"


def _build(root_path: str, entries: list[_Entry]) -> Node:
    """Build the node for root_path from entries relative to it."""
    # Directory names in order of first appearance
    directory_names: list[str] = []
    for _, segments, is_dir in entries:
        if (len(segments) > 1 or is_dir) and segments[0] not in directory_names:
            directory_names.append(segments[0])

    files: list[str] = []
    seen_files: set[str] = set()
    for original, segments, is_dir in entries:
        if len(segments) != 1 or is_dir:
            continue
        name = segments[0]
        # A name that also prefixes a longer path is a directory, not a file
        if name in directory_names or name in seen_files:
            continue
        seen_files.add(name)
        files.append(original)

    children = []
    for name in directory_names:
        # Segment-exact match on the first segment only
        subset = [
            (original, segments[1:], is_dir)
            for original, segments, is_dir in entries
            if segments[0] == name and len(segments) > 1
        ]
        children.append(_build(_join(root_path, name), subset))

    return Node(label=root_path, files=tuple(files), children=tuple(children))


def build_from_paths(paths: Iterable[str]) -> Node:
    """
    Reconstruct the directory tree described by a set of path strings.

    Example:
        ["/lib", "/lib/one/a.mp4", "/lib/one/b.mp4", "/lib/two/c.mp4"]
        gives "/lib" with children "/lib/one" (a.mp4, b.mp4) and
        "/lib/two" (c.mp4).

    A string ending with a separator, or one that is a prefix of another
    string, is treated as a directory. Everything else is a file.

    Args:
        paths: Path strings. Backslashes are treated as separators.

    Returns:
        The root Node. File entries keep the (normalized) input strings.

    Raises:
        InputError: If paths is empty, the root is empty, or a path does not
            lie under the root.
    """
    values = [p.replace("\\", "/") for p in paths]
    if not values:
        raise InputError("Cannot build a tree from an empty path list")

    # min() keeps the first of several equally short strings
    root_path = min(values, key=len)
    if not root_path:
        raise InputError("Root path is empty")
    root_path = root_path.rstrip("/") or "/"
    prefix = _join(root_path, "")

    entries: list[_Entry] = []
    for value in values:
        if value.rstrip("/") == root_path.rstrip("/"):
            continue
        if not value.startswith(prefix):
            raise InputError(f"Path is not under root '{root_path}': {value}")

        segments = [s for s in value[len(prefix):].split("/") if s]
        if segments:
            entries.append((value, segments, value.endswith("/")))

    return _build(root_path, entries)
