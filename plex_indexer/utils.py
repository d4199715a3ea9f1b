"""
Utility functions for the Plex indexer.

Includes:
- Recognized media suffixes
- JSON and run log helpers
- UI helpers
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from .errors import FilesystemError

# Global console instance
console = Console()

def print_header(title: str, subtitle: str = ""):
    """Print a styled header."""
    console.print(Panel(f"[bold blue]{title}[/bold blue]\n[italic]{subtitle}[/italic]", expand=False))

def print_error(msg: str):
    console.print(f"[bold red]ERROR:[/bold red] {msg}")

def print_warning(msg: str):
    console.print(f"[bold yellow]WARNING:[/bold yellow] {msg}")

def print_success(msg: str):
    console.print(f"[bold green]SUCCESS:[/bold green] {msg}")


def print_node_tree(node, max_files: int = 10):
    """
    Render a Node tree with rich.

    Args:
        node: Root Node to render.
        max_files: Files shown per directory before the rest are summarized.
    """
    def add_branch(parent: Tree, current):
        for file in current.files[:max_files]:
            parent.add(f"[yellow]{file.rsplit('/', 1)[-1]}[/yellow]")
        if len(current.files) > max_files:
            parent.add(f"[italic]... and {len(current.files) - max_files} more[/italic]")
        for child in current.children:
            add_branch(parent.add(f"[bold blue]{child.name}[/bold blue]"), child)

    tree = Tree(f"[bold green]{node.label}[/bold green]")
    add_branch(tree, node)
    console.print(tree)


def print_groups_table(groups, grouping_type: str):
    """Print a summary table of the groups about to be linked."""
    table = Table(title=f"{grouping_type} Groups")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Group", style="magenta")
    table.add_column("Files", style="green", justify="right")

    for group in groups:
        table.add_row(str(group.ordinal), group.key, str(len(group.items)))

    console.print(table)


# -----------------------------------------------------------------------------
# Media Suffixes
# -----------------------------------------------------------------------------

# Files ending with one of these are indexed and linked
DEFAULT_SUFFIXES = (".mp4", ".zip", ".ts")


def normalize_suffix(suffix: str) -> str:
    """Lower-case a suffix and make sure it starts with a dot."""
    suffix = suffix.strip().lower()
    return suffix if suffix.startswith('.') else f'.{suffix}'


def parse_suffixes(value: str | None) -> tuple[str, ...]:
    """
    Parse a comma-separated suffix list from the command line.

    Args:
        value: e.g. "mp4, .MKV,ts". None or blank gives the defaults.

    Returns:
        Normalized suffixes, e.g. (".mp4", ".mkv", ".ts").
    """
    if not value or not value.strip():
        return DEFAULT_SUFFIXES
    suffixes = []
    for part in value.split(','):
        if part.strip():
            suffix = normalize_suffix(part)
            if suffix not in suffixes:
                suffixes.append(suffix)
    return tuple(suffixes)


def has_suffix(name: str, suffixes: Iterable[str]) -> bool:
    """Case-insensitive check that name ends with one of suffixes."""
    name_lower = name.lower()
    return any(name_lower.endswith(normalize_suffix(s)) for s in suffixes)


# -----------------------------------------------------------------------------
# Persistence
# -----------------------------------------------------------------------------

def save_json(data: Any, path: Path) -> None:
    """
    Save data to a JSON file with pretty formatting.

    Args:
        data: The data to serialize.
        path: The output file path.

    Raises:
        FilesystemError: If the file cannot be written.
    """
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise FilesystemError(f"Cannot write {path}: {e}") from e
    print(f"[INFO] Saved: {path}")


def save_text(text: str, path: Path) -> None:
    """Write text to a file, raising FilesystemError on failure."""
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
    except OSError as e:
        raise FilesystemError(f"Cannot write {path}: {e}") from e
    print(f"[INFO] Saved: {path}")


def load_json(path: Path) -> Any:
    """
    Load data from a JSON file.

    Args:
        path: The input file path.

    Returns:
        The deserialized data.
    """
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def load_path_list(path: Path) -> list[str]:
    """
    Read a path list file, one path per line.

    Blank lines are skipped; surrounding whitespace is kept except the
    line ending, since file names may start or end with spaces.
    """
    with open(path, 'r', encoding='utf-8') as f:
        return [line.rstrip('\r\n') for line in f if line.strip()]


def write_run_log(file_paths: Iterable[str], log_dir: Path, prefix: str = "sym_link") -> Path:
    """
    Write the qualifying files of a run to a timestamped log file.

    Args:
        file_paths: Paths to record, one per line.
        log_dir: Directory for the log (created if missing).
        prefix: File name prefix.

    Returns:
        Path of the written log.

    Raises:
        FilesystemError: If the directory or the log cannot be written.
    """
    log_dir = Path(log_dir)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"{prefix}_{timestamp}.log"

    try:
        log_dir.mkdir(parents=True, exist_ok=True)

        counter = 1
        while log_file.exists():
            log_file = log_dir / f"{prefix}_{timestamp}_{counter}.log"
            counter += 1

        with open(log_file, 'w', encoding='utf-8') as f:
            for file_path in file_paths:
                f.write(file_path + '\n')
    except OSError as e:
        raise FilesystemError(f"Cannot write run log {log_file}: {e}") from e

    print(f"[INFO] Run log: {log_file}")
    return log_file
