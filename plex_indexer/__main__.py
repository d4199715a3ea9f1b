#!/usr/bin/env python3
"""
Plex Indexer - CLI Entry Point
==============================

Usage:
    python -m plex_indexer sym-link /media/Courses -d /media/Plex --season
    python -m plex_indexer sym-link course_tree.txt --input-format tree --base-dir /media/Course
    python -m plex_indexer tree /media/Courses -o tree.txt
    python -m plex_indexer parse tree.txt -o tree.json
"""

import argparse
import sys
from pathlib import Path

from .builders import build_from_directory, build_from_paths, parse_tree_text
from .codec import format_tree_text
from .errors import FilesystemError, IndexerError, InputError
from .grouping import collect_media_files, group_paths
from .linker import CHAPTER, SEASON, generate_link_farm
from .tree import Node
from .utils import (
    console, print_header, print_error, print_warning, print_success,
    print_groups_table, print_node_tree, parse_suffixes, save_json, save_text,
    load_path_list, write_run_log
)

INPUT_FORMATS = ["directory", "tree", "paths"]


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding='utf-8')
    except OSError as e:
        raise InputError(f"Cannot read {path}: {e}") from e


def build_source_tree(source: Path, input_format: str, suffixes: tuple[str, ...]) -> Node:
    """
    Build a Node tree from the source in the given format.

    Args:
        source: A directory, a tree diagram file or a path list file.
        input_format: One of INPUT_FORMATS.
        suffixes: Recognized media suffixes (used by the diagram parser).

    Returns:
        The root Node.
    """
    if input_format == "directory":
        return build_from_directory(source)

    if not source.is_file():
        raise InputError(f"Input file not found: {source}")

    if input_format == "tree":
        return parse_tree_text(_read_text(source), suffixes)

    try:
        paths = load_path_list(source)
    except OSError as e:
        raise InputError(f"Cannot read {source}: {e}") from e
    return build_from_paths(paths)


def _save_optional_json(data, path: Path) -> None:
    """Save a side artifact; a write failure is reported and the run goes on."""
    try:
        save_json(data, path)
    except FilesystemError as e:
        print_warning(f"{e} (continuing)")


# =============================================================================
# Subcommands
# =============================================================================

def cmd_sym_link(args) -> int:
    """Sym-link command - index the source and build the link farm."""
    suffixes = parse_suffixes(args.suffixes)
    grouping_type = SEASON if args.season else CHAPTER
    root_path = str(args.base_dir) if args.base_dir else None

    print_header(
        "Plex Indexer",
        f"Source: {args.source}\nDestination: {args.destination}\nGrouping: {grouping_type}"
    )

    try:
        # Step 1: Index
        console.print("\n[bold cyan][STEP 1] Indexing source...[/bold cyan]")
        with console.status("[bold green]Indexing...[/bold green]"):
            node = build_source_tree(args.source, args.input_format, suffixes)
        console.print(f"[INFO] Found {node.count_files()} files in {node.count_directories()} directories")

        if args.json_out:
            _save_optional_json(node.to_dict(), args.json_out)

        # Step 2: Group
        console.print("\n[bold cyan][STEP 2] Grouping media files...[/bold cyan]")
        media_files = collect_media_files(node, suffixes, root_path)
        if not media_files:
            print_warning(f"No files ending with {', '.join(suffixes)} found")
            return 0

        if not args.dry_run and args.log_dir:
            try:
                write_run_log(media_files, args.log_dir)
            except FilesystemError as e:
                print_warning(f"{e} (continuing without a run log)")

        groups = group_paths(media_files)
        print_groups_table(groups, grouping_type)

        # Step 3: Link
        console.print("\n[bold cyan][STEP 3] Creating symbolic links...[/bold cyan]")
        report = generate_link_farm(
            groups,
            args.destination,
            grouping_type,
            numbered_seasons=args.numbered_seasons,
            dry_run=args.dry_run
        )

        if args.report_out:
            _save_optional_json(report, args.report_out)

        if report["failed_count"]:
            print_warning(f"{report['failed_count']} files could not be linked")
        else:
            print_success("Operation Complete!")

        if args.dry_run:
            print_warning("This was a DRY-RUN. No links were created.")

        return 0

    except IndexerError as e:
        print_error(str(e))
        return 1
    except KeyboardInterrupt:
        print("\n[ABORT] Operation cancelled by user")
        return 130


def cmd_tree(args) -> int:
    """Tree command - print the tree diagram of a source."""
    suffixes = parse_suffixes(args.suffixes)

    try:
        node = build_source_tree(args.source, args.input_format, suffixes)
    except IndexerError as e:
        print_error(str(e))
        return 1

    if args.rich:
        print_node_tree(node)
        return 0

    text = format_tree_text(node, include_root=True, short_names=not args.full_paths)

    if args.output:
        try:
            save_text(text + "\n", args.output)
        except FilesystemError as e:
            print_error(str(e))
            return 1
    else:
        print(text)
    return 0


def cmd_parse(args) -> int:
    """Parse command - convert a tree diagram into the JSON tree."""
    suffixes = parse_suffixes(args.suffixes)

    try:
        node = parse_tree_text(_read_text(args.tree_file), suffixes)
    except IndexerError as e:
        print_error(str(e))
        return 1

    print(f"[INFO] Parsed {node.count_files()} files in {node.count_directories()} directories")
    try:
        save_json(node.to_dict(), args.output)
    except FilesystemError as e:
        print_error(str(e))
        return 1
    return 0


# =============================================================================
# Main
# =============================================================================

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Plex Indexer - Organize media folders into Plex friendly symbolic links",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- SYM-LINK command ---
    link_parser = subparsers.add_parser("sym-link", help="Index a source and create the link farm")
    link_parser.add_argument("source", type=Path, help="Directory to index (or input file, see --input-format)")
    link_parser.add_argument("-d", "--destination", type=Path, default=Path("plex_library"),
                            help="Root of the link farm (default: plex_library)")
    link_parser.add_argument("-s", "--season", action="store_true",
                            help="Season grouping (Season N - name/S01E01 - file) instead of chapters")
    link_parser.add_argument("--numbered-seasons", action="store_true",
                            help="Use the season number in episode names (S02E01) instead of S01")
    link_parser.add_argument("--input-format", choices=INPUT_FORMATS, default="directory",
                            help="How to read the source (default: directory)")
    link_parser.add_argument("--base-dir", type=Path,
                            help="Directory a tree diagram describes (default: its root label)")
    link_parser.add_argument("--suffixes", type=str, metavar="EXTS",
                            help="Media suffixes to link (comma-separated, default: mp4,zip,ts)")
    link_parser.add_argument("--dry-run", action="store_true",
                            help="Show what would be linked without creating anything")
    link_parser.add_argument("--json-out", type=Path,
                            help="Save the indexed tree as JSON")
    link_parser.add_argument("--report-out", type=Path,
                            help="Save the run report as JSON")
    link_parser.add_argument("--log-dir", type=Path, default=Path("logs"),
                            help="Directory for the run log (default: logs)")
    link_parser.set_defaults(func=cmd_sym_link)

    # --- TREE command ---
    tree_parser = subparsers.add_parser("tree", help="Print the tree diagram of a source")
    tree_parser.add_argument("source", type=Path, help="Directory (or input file, see --input-format)")
    tree_parser.add_argument("--input-format", choices=INPUT_FORMATS, default="directory",
                            help="How to read the source (default: directory)")
    tree_parser.add_argument("--suffixes", type=str, metavar="EXTS",
                            help="Media suffixes (comma-separated, default: mp4,zip,ts)")
    tree_parser.add_argument("-o", "--output", type=Path,
                            help="Write the diagram to a file instead of stdout")
    tree_parser.add_argument("--full-paths", action="store_true",
                            help="Show stored paths instead of names")
    tree_parser.add_argument("--rich", action="store_true",
                            help="Render a colored tree")
    tree_parser.set_defaults(func=cmd_tree)

    # --- PARSE command ---
    parse_parser = subparsers.add_parser("parse", help="Convert a tree diagram to JSON")
    parse_parser.add_argument("tree_file", type=Path, help="Tree diagram file")
    parse_parser.add_argument("-o", "--output", type=Path, default=Path("tree.json"),
                             help="Output JSON file (default: tree.json)")
    parse_parser.add_argument("--suffixes", type=str, metavar="EXTS",
                             help="File suffixes (comma-separated, default: mp4,zip,ts)")
    parse_parser.set_defaults(func=cmd_parse)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
