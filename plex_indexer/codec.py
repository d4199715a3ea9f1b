"""
Tree diagram text codec.

Reads and writes the box-drawing notation printed by `tree`:

    Course
    ├── intro.mp4
    └── outro.mp4
    ├── 01 - Basics
    │   ├── a.mp4
    │   └── b.mp4
    └── 02 - Advanced
        └── c.mp4

Files are listed before directories. The last file always gets the closing
connector, even when directories follow it; parse_tree_text accepts exactly
what format_tree_text produces, so the two round-trip.
"""

from typing import Iterable

from .errors import ParseError
from .tree import Node
from .utils import DEFAULT_SUFFIXES, has_suffix

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "

# One nesting level: a vertical bar, or blank space under a last directory
INDENTS = (PIPE, SPACE)
BRANCH_GLYPHS = ("├──", "└──")


def _split_indent(line: str) -> tuple[int, str]:
    """Return (number of leading indentation layers, rest of the line)."""
    depth = 0
    while line.startswith(INDENTS):
        line = line[len(PIPE):]
        depth += 1
    return depth, line


def _is_branch(text: str) -> bool:
    return text.startswith(BRANCH_GLYPHS)


def _strip_branch(text: str) -> str:
    """Remove a leading branch connector and the space after it."""
    if _is_branch(text):
        text = text[len(BRANCH_GLYPHS[0]):]
        if text.startswith(" "):
            text = text[1:]
    return text


def _strip_connectors(line: str) -> str:
    _, text = _split_indent(line)
    return _strip_branch(text)


def _dedent(line: str) -> str:
    """Remove one indentation layer from a line, if it has one."""
    if line.startswith(INDENTS):
        return line[len(PIPE):]
    return line


def _is_block_start(line: str) -> bool:
    depth, text = _split_indent(line)
    return depth == 0 and _is_branch(text)


def _parse_block(lines: tuple[str, ...], suffixes: tuple[str, ...]) -> Node:
    """Parse a block whose first line is the node label."""
    label = _strip_connectors(lines[0])

    # Pass 1: top-level file lines
    files: list[str] = []
    remaining: list[str] = []
    for line in lines[1:]:
        depth, text = _split_indent(line)
        if depth == 0:
            name = _strip_branch(text)
            if name.strip() and has_suffix(name.rstrip(), suffixes):
                if name not in files:
                    files.append(name)
                continue
        remaining.append(line)

    # Pass 2: directory blocks, each from a depth-zero branch line up to
    # the next one. Repeated headers share one body, in first-seen order.
    bodies: dict[str, list[str]] = {}
    cursor = 0
    while cursor < len(remaining):
        if not _is_block_start(remaining[cursor]):
            # Blank or stray line outside any block
            cursor += 1
            continue

        end = cursor + 1
        while end < len(remaining) and not _is_block_start(remaining[end]):
            end += 1

        header = _strip_connectors(remaining[cursor])
        body = bodies.setdefault(header, [])
        body.extend(_dedent(line) for line in remaining[cursor + 1:end])
        cursor = end

    children = tuple(
        _parse_block((header,) + tuple(body), suffixes)
        for header, body in bodies.items()
    )
    return Node(label=label, files=tuple(files), children=children)


def parse_tree_text(text: str, suffixes: Iterable[str] = DEFAULT_SUFFIXES) -> Node:
    """
    Parse a tree diagram into a Node tree.

    A line directly under a node is a file if its name ends with one of the
    recognized suffixes; any other branch line opens a directory whose
    contents are the more deeply indented lines below it. A directory or file
    listed twice under the same parent is merged into its first occurrence.

    Args:
        text: The diagram. Non-breaking spaces (as emitted by `tree`) are
            read as plain spaces.
        suffixes: Recognized file suffixes, e.g. (".mp4", ".ts").

    Returns:
        The root Node. Labels and files are bare names as written.

    Raises:
        ParseError: If the text contains no lines.
    """
    lines = text.replace("\u00a0", " ").splitlines()

    # Leading blank lines carry no root label
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        raise ParseError("Tree diagram is empty")

    return _parse_block(tuple(lines), tuple(suffixes))


def _format_lines(node: Node, include_root: bool, short_names: bool) -> list[str]:
    lines: list[str] = []

    if include_root:
        lines.append(node.label)

    for i, file in enumerate(node.files):
        name = file.rsplit("/", 1)[-1] if short_names else file
        # Last file closes even if directories follow
        connector = LAST_BRANCH if i == len(node.files) - 1 else BRANCH
        lines.append(f"{connector}{name}")

    for i, child in enumerate(node.children):
        is_last = i == len(node.children) - 1
        name = child.name if short_names else child.label
        lines.append(f"{LAST_BRANCH if is_last else BRANCH}{name}")

        prefix = SPACE if is_last else PIPE
        for sub_line in _format_lines(child, False, short_names):
            lines.append(f"{prefix}{sub_line}")

    return lines


def format_tree_text(node: Node, include_root: bool = True, short_names: bool = False) -> str:
    """
    Format a Node tree as a tree diagram.

    Args:
        node: The tree to format.
        include_root: Emit the root label as the first line.
        short_names: Emit the last path segment of every file and directory
            instead of the stored entry. The root label is always emitted as is.

    Returns:
        The diagram, lines joined with "\\n" and no trailing newline.
    """
    return "\n".join(_format_lines(node, include_root, short_names))
