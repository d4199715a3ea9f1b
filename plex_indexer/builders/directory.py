"""
Build a Node tree by listing a real directory.

Entries keep the order the directory listing returns them in; nothing is
sorted here. Symbolic links are recorded as files and never followed, so
link cycles on disk cannot make the walk loop.
"""

import os
from pathlib import Path

from ..errors import InputError
from ..tree import Node


def _list_directory(path: str) -> tuple[list[str], list[str]]:
    """
    List one directory.

    Args:
        path: Directory to list.

    Returns:
        (file paths, directory paths), both in listing order.

    Raises:
        InputError: If the directory or one of its entries cannot be read.
    """
    files: list[str] = []
    directories: list[str] = []

    try:
        with os.scandir(path) as entries:
            for entry in entries:
                entry_path = entry.path.replace(os.sep, "/")
                if entry.is_dir(follow_symlinks=False):
                    directories.append(entry_path)
                else:
                    files.append(entry_path)
    except OSError as e:
        raise InputError(f"Cannot list directory {path}: {e}") from e

    return files, directories


def build_from_directory(root: str | Path) -> Node:
    """
    Recursively index a directory into a Node tree.

    Labels and file entries are full paths built from ``root``, so a relative
    root gives relative paths and an absolute root gives absolute ones.

    Args:
        root: The directory to index.

    Returns:
        The root Node.

    Raises:
        InputError: If root is missing, is not a directory, or any directory
            below it cannot be listed. No partial tree is returned.
    """
    root_path = os.fspath(root).replace(os.sep, "/")
    if len(root_path) > 1:
        root_path = root_path.rstrip("/")

    if not os.path.exists(root_path):
        raise InputError(f"Source not found: {root_path}")
    if not os.path.isdir(root_path):
        raise InputError(f"Source is not a directory: {root_path}")

    # Pre-order walk with an explicit stack; depth is limited only by memory
    listings: dict[str, tuple[list[str], list[str]]] = {}
    visit_order: list[str] = []
    stack = [root_path]

    while stack:
        current = stack.pop()
        listing = _list_directory(current)
        listings[current] = listing
        visit_order.append(current)
        stack.extend(listing[1])

    # Children are always visited after their parent, so build in reverse
    built: dict[str, Node] = {}
    for path in reversed(visit_order):
        files, directories = listings.pop(path)
        built[path] = Node(
            label=path,
            files=tuple(files),
            children=tuple(built.pop(d) for d in directories),
        )

    return built[root_path]
