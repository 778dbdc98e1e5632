#!/usr/bin/env python3
"""
Basic async query example showing draxt collections.

This example demonstrates:
- Querying a directory tree with a glob pattern
- Filtering a collection by node kind
- Reading cached stats of every node concurrently
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from draxt import draxt


async def main():
    """Demonstrate a basic async query."""
    # Get the root path from command line or use current directory
    root_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()

    print(f"Querying: {root_path}/**")
    print("-" * 50)

    collection = await draxt('**', str(root_path))

    files = collection.files()
    directories = collection.directories()
    symlinks = collection.symlinks()

    # Stats are already cached by the query, so sizes need no extra I/O
    sizes = files.map(lambda node: node.get_size() or 0)
    total_size = sum(sizes)

    broken = await symlinks.map_async(lambda node: node.is_broken())

    print(f"\nQuery Summary:")
    print(f"  Directories: {directories.length:,}")
    print(f"  Files: {files.length:,}")
    print(f"  Symbolic links: {symlinks.length:,} ({sum(broken)} broken)")
    print(f"  Total Size: {total_size / 1024 / 1024:.1f} MB")

    large_files = files.filter(lambda node: (node.get_size() or 0) > 1_000_000)
    if large_files.length:
        print(f"\nLarge Files (>1MB):")
        large_files.sort(key=lambda node: node.get_size(), reverse=True)
        for node in large_files.slice(0, 5):
            print(f"  {node.get_size() / 1024 / 1024:.1f} MB: {node.base_name}")


if __name__ == "__main__":
    print("draxt - Basic Async Query Example")
    print("=" * 50)
    asyncio.run(main())
