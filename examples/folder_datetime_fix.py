#!/usr/bin/env python3
"""
Real-world example: Fix directory modification times to match their newest content.

This example demonstrates:
- Selecting every directory of a tree with one query
- Processing the deepest directories first (sort with a key)
- Reading cached stats of children and updating timestamps with utimes
"""

import asyncio
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from draxt import Directory, draxt


async def get_newest_timestamp(directory: Directory) -> Optional[datetime]:
    """Get the newest modification time from direct children of a directory."""
    try:
        children = await directory.children({'dot': True})
    except OSError as e:
        print(f"  Warning: Cannot read {directory.path_name}: {e}")
        return None

    times = [t for t in children.map(lambda node: node.get_modified_time()) if t is not None]
    return max(times) if times else None


async def fix_directory_timestamps(root_path: Path, dry_run: bool = True) -> Dict[str, int]:
    """
    Fix directory modification times to match their newest content.

    Child directories are fixed before their parents, so a parent sees the
    corrected times of its sub-directories.
    """
    print(f"Scanning directory tree: {root_path}")
    print(f"Mode: {'DRY RUN' if dry_run else 'LIVE UPDATE'}")
    print("-" * 60)

    stats = {"scanned": 0, "updated": 0, "skipped": 0, "errors": 0}

    collection = await draxt('**', {'cwd': str(root_path), 'dot': True})
    directories = collection.directories()
    directories.add(Directory(str(root_path)))
    directories.sort(key=lambda node: node.path_name.count(os.sep), reverse=True)
    stats["scanned"] = directories.length

    print(f"Found {directories.length} directories to process")
    print("-" * 60)

    for directory in directories:
        newest_time = await get_newest_timestamp(directory)

        if newest_time is None:
            stats["skipped"] += 1
            continue

        try:
            await directory.renew_stats()
        except OSError as e:
            print(f"  Error reading {directory.path_name}: {e}")
            stats["errors"] += 1
            continue
        current_time = directory.get_modified_time()

        if abs((current_time - newest_time).total_seconds()) > 1:  # 1 second tolerance
            if dry_run:
                print(f"  Would update: {directory.path_name}")
                print(f"    Current: {current_time}")
                print(f"    New:     {newest_time}")
            else:
                try:
                    await directory.utimes(newest_time, newest_time)
                    print(f"  Updated: {directory.path_name}")
                    stats["updated"] += 1
                except OSError as e:
                    print(f"  Error updating {directory.path_name}: {e}")
                    stats["errors"] += 1
        else:
            stats["skipped"] += 1

    return stats


async def main():
    """Run the folder datetime fix utility."""
    if len(sys.argv) < 2:
        print("Usage: python folder_datetime_fix.py <directory> [--live]")
        print("  Add --live to actually update timestamps (default is dry run)")
        sys.exit(1)

    root_path = Path(sys.argv[1]).absolute()
    dry_run = "--live" not in sys.argv

    if not root_path.is_dir():
        print(f"Error: Not a directory: {root_path}")
        sys.exit(1)

    print("draxt - Folder DateTime Fix Example")
    print("=" * 60)

    loop = asyncio.get_running_loop()
    start_time = loop.time()
    stats = await fix_directory_timestamps(root_path, dry_run)
    elapsed = loop.time() - start_time

    print("\n" + "=" * 60)
    print("Summary:")
    print(f"  Directories scanned: {stats['scanned']:,}")
    print(f"  Directories updated: {stats['updated']:,}")
    print(f"  Directories skipped: {stats['skipped']:,}")
    print(f"  Errors encountered:  {stats['errors']:,}")
    print(f"  Time elapsed: {elapsed:.2f} seconds")

    if dry_run:
        print("\nThis was a DRY RUN. Use --live to actually update timestamps.")


if __name__ == "__main__":
    asyncio.run(main())
