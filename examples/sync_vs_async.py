#!/usr/bin/env python3
"""
Comparison between the blocking and the async form of draxt queries.

This example demonstrates:
- ``draxt_sync`` and ``await draxt`` selecting the same nodes
- Timing of both forms on the same tree
- Querying several directories in parallel
"""

import asyncio
import sys
import time
from pathlib import Path
from typing import List, Tuple

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from draxt import Directory, draxt, draxt_sync


def sync_query(root_path: Path) -> Tuple[int, int, float]:
    """Query the tree with the blocking API."""
    start_time = time.perf_counter()

    collection = draxt_sync('**', str(root_path))

    elapsed = time.perf_counter() - start_time
    return collection.files().length, collection.directories().length, elapsed


async def async_query(root_path: Path) -> Tuple[int, int, float]:
    """Query the tree with the async API."""
    start_time = time.perf_counter()

    # Stats for every match are fetched concurrently
    collection = await draxt('**', str(root_path))

    elapsed = time.perf_counter() - start_time
    return collection.files().length, collection.directories().length, elapsed


async def parallel_children(paths: List[Path]) -> Tuple[int, float]:
    """List several directories in parallel."""
    start_time = time.perf_counter()

    results = await asyncio.gather(*[Directory(str(p)).children() for p in paths])

    elapsed = time.perf_counter() - start_time
    return sum(children.length for children in results), elapsed


def main():
    """Run the comparison."""
    # Get the root path from command line or use current directory
    root_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()

    print("draxt - Sync vs Async Comparison")
    print("=" * 60)
    print(f"Test Directory: {root_path}")
    print("-" * 60)

    print("\n1. Blocking query (draxt_sync):")
    sync_files, sync_dirs, sync_time = sync_query(root_path)
    print(f"   Files: {sync_files:,}, Dirs: {sync_dirs:,}")
    print(f"   Time: {sync_time:.3f} seconds")

    print("\n2. Async query (await draxt):")
    async_files, async_dirs, async_time = asyncio.run(async_query(root_path))
    print(f"   Files: {async_files:,}, Dirs: {async_dirs:,}")
    print(f"   Time: {async_time:.3f} seconds")

    if (sync_files, sync_dirs) != (async_files, async_dirs):
        print("\n   !!! The two forms disagree; the tree changed between queries?")

    subdirs = [p for p in root_path.iterdir() if p.is_dir()][:5]
    if len(subdirs) > 1:
        print("\n3. Parallel children() of several directories:")
        total_items, par_time = asyncio.run(parallel_children(subdirs))
        print(f"   Entries: {total_items:,}")
        print(f"   Time: {par_time:.3f} seconds")


if __name__ == "__main__":
    main()
