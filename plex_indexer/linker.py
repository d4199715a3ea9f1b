"""
Symbolic link farm generation for the Plex indexer.

Turns grouped media files into a destination tree of directories and
symbolic links pointing back at the original files.
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Iterable
from tqdm import tqdm

from .errors import FilesystemError
from .grouping import MediaGroup, MediaItem

SEASON = "Season"
CHAPTER = "Chapter"


def group_directory_name(group: MediaGroup, grouping_type: str = CHAPTER) -> str:
    """
    Destination subdirectory for a group.

    "Season {ordinal} - {key}" in Season mode, the bare key otherwise.
    """
    if grouping_type == SEASON:
        return f"Season {group.ordinal} - {group.key}"
    return group.key


def link_name(
    group: MediaGroup,
    item: MediaItem,
    grouping_type: str = CHAPTER,
    numbered_seasons: bool = False
) -> str:
    """
    File name of the link created for an item.

    In Season mode: "S01E{item:02} - {file name, spaces as dots}". With
    numbered_seasons the season part is the group ordinal instead of 01.
    Otherwise the original file name.
    """
    if grouping_type == SEASON:
        season = group.ordinal if numbered_seasons else 1
        return f"S{season:02}E{item.ordinal:02} - {item.filename.replace(' ', '.')}"
    return item.filename


def _create_directory(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Failed to create directory {path}: {e}") from e


def _create_link(target: str, link_path: Path) -> None:
    try:
        os.symlink(target, link_path)
    except OSError as e:
        raise FilesystemError(f"Failed to link {link_path} -> {target}: {e}") from e


def generate_link_farm(
    groups: Iterable[MediaGroup],
    destination: Path,
    grouping_type: str = CHAPTER,
    numbered_seasons: bool = False,
    dry_run: bool = False
) -> dict:
    """
    Create (or simulate) the link farm for grouped media files.

    A group whose directory cannot be created is skipped, and so is a file
    whose link cannot be created; everything else is still linked. Nothing
    already created is rolled back.

    Args:
        groups: Output of group_media_files().
        destination: Root of the link farm.
        grouping_type: SEASON, or anything else for chapter style naming.
        numbered_seasons: Use the group ordinal as the season in link names.
        dry_run: If True, only print what would be linked.

    Returns:
        Report dict with counts and the error messages.
    """
    groups = list(groups)
    destination = Path(destination)
    total_files = sum(len(g.items) for g in groups)

    created_dirs_count = 0
    created_links_count = 0
    failed_count = 0
    errors: list[str] = []

    mode = "DRY-RUN" if dry_run else "APPLY"
    print(f"\n[{mode}] Linking {total_files} files in {len(groups)} groups into {destination}...")

    if dry_run:
        count = 0
        for group in groups:
            group_dir = destination / group_directory_name(group, grouping_type)
            for item in group.items:
                count += 1
                if count <= 10:
                    link_path = group_dir / link_name(group, item, grouping_type, numbered_seasons)
                    print(f"  [WOULD LINK] {link_path} -> {item.path}")
        if count > 10:
            print(f"  ... and {count-10} more")
    else:
        with tqdm(total=total_files, unit="file") as pbar:
            for group in groups:
                group_dir = destination / group_directory_name(group, grouping_type)

                try:
                    _create_directory(group_dir)
                except FilesystemError as e:
                    failed_count += len(group.items)
                    errors.append(str(e))
                    tqdm.write(f"[ERROR] {e}")
                    pbar.update(len(group.items))
                    continue
                created_dirs_count += 1

                for item in group.items:
                    link_path = group_dir / link_name(group, item, grouping_type, numbered_seasons)
                    try:
                        _create_link(os.path.abspath(item.path), link_path)
                        created_links_count += 1
                    except FilesystemError as e:
                        failed_count += 1
                        errors.append(str(e))
                        tqdm.write(f"[ERROR] {e}")
                    pbar.update(1)

    report = {
        "destination": str(destination),
        "grouping_type": grouping_type,
        "dry_run": dry_run,
        "executed_at": datetime.now().isoformat(timespec='seconds'),
        "groups_count": len(groups),
        "created_dirs_count": created_dirs_count,
        "created_links_count": created_links_count,
        "failed_count": failed_count,
        "errors": errors
    }

    print(f"\n[{mode}] Complete: {created_links_count} linked, {failed_count} failed")

    return report
