"""
Hierarchical model of an indexed directory.

A Node is a directory (or the root) holding an ordered list of file entries
and an ordered list of child Nodes. Trees are built once by one of the
builders and are read-only afterwards.

Entries are resolved to paths as follows:
- an entry containing "/" is already a path and resolves to itself
  (trees built from the filesystem or from a path list store full paths)
- a bare name resolves to "<parent path>/<name>"
  (trees parsed from a tree diagram store bare names)
"""

from dataclasses import dataclass
from typing import Iterator


def resolve_entry(parent_path: str | None, entry: str) -> str:
    """
    Resolve a label or file entry against its parent's resolved path.

    Args:
        parent_path: Resolved path of the containing node, or None at the root.
        entry: A bare name or a path.

    Returns:
        The resolved path.
    """
    if parent_path is None or "/" in entry:
        return entry
    return f"{parent_path.rstrip('/')}/{entry}"


@dataclass(frozen=True)
class Node:
    """A directory entry with its files and subdirectories."""
    label: str
    files: tuple[str, ...] = ()
    children: tuple["Node", ...] = ()

    @property
    def name(self) -> str:
        """Last path segment of the label."""
        stripped = self.label.rstrip("/")
        if not stripped:
            return self.label
        return stripped.rsplit("/", 1)[-1]

    def iter_file_paths(self, root_path: str | None = None) -> Iterator[str]:
        """
        Yield the resolved path of every file in the tree, depth-first.

        A node's own files come before its subdirectories, and both keep
        their insertion order.

        Args:
            root_path: Path the root node stands for. Defaults to the root label.

        Yields:
            Resolved file paths.
        """
        stack = [(self, root_path if root_path is not None else self.label)]
        while stack:
            node, node_path = stack.pop()
            for file in node.files:
                yield resolve_entry(node_path, file)
            # Reversed so the first child is popped first
            for child in reversed(node.children):
                stack.append((child, resolve_entry(node_path, child.label)))

    def iter_nodes(self) -> Iterator["Node"]:
        """Yield this node and every descendant, depth-first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def count_files(self) -> int:
        return sum(len(node.files) for node in self.iter_nodes())

    def count_directories(self) -> int:
        """Number of directories below this node (the node itself excluded)."""
        return sum(len(node.children) for node in self.iter_nodes())

    def to_dict(self) -> dict:
        """
        Convert the tree to a JSON-compatible dict.

        Returns:
            {"path": ..., "files": [...], "directories": [...]}
        """
        return {
            "path": self.label,
            "files": list(self.files),
            "directories": [child.to_dict() for child in self.children],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        """Create a Node tree from a dict produced by to_dict()."""
        return cls(
            label=data.get("path", ""),
            files=tuple(data.get("files", [])),
            children=tuple(cls.from_dict(d) for d in data.get("directories", [])),
        )
