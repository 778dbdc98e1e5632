#!/usr/bin/env python
"""
Simple CI Tester for draxt
==========================

Runs the checks CI runs, locally, before you push.

Usage:
    python scripts/test-ci.py
"""

import shutil
import subprocess
import sys
from pathlib import Path


def run_command(cmd, description, critical=True):
    """Run a command and return True if it succeeds."""
    print(f"\n[Testing] {description}...")
    print(f"  Command: {cmd}")

    result = subprocess.run(cmd, shell=True, capture_output=True, text=True)

    if result.returncode == 0:
        print(f"  PASSED")
        return True
    else:
        if critical:
            print(f"  FAILED - This will fail in CI!")
            if result.stderr:
                print(f"  Error: {result.stderr[:500]}")
        else:
            print(f"  WARNING - Non-critical issue")
        return False


def main():
    print("=" * 60)
    print("CI/CD LOCAL TESTER")
    print("=" * 60)

    project_root = Path(__file__).parent.parent
    all_passed = True

    # Test 1: Can we import the package?
    if not run_command(
        f'"{sys.executable}" -c "import draxt"',
        "Basic import test",
        critical=True
    ):
        print("\n  Fix: Check that the package is installed (pip install -e .[dev])")
        all_passed = False

    # Test 2: Do the tests run?
    if not run_command(
        f'"{sys.executable}" "{project_root / "run_tests.py"}"',
        "Run test suite",
        critical=True
    ):
        print("\n  Fix: Debug the failing tests")
        all_passed = False

    # Test 3: Any Python syntax errors?
    if shutil.which("flake8"):
        if not run_command(
            f'flake8 "{project_root / "draxt"}" "{project_root / "tests"}" '
            '--count --select=E9,F63,F7,F82 --show-source',
            "Check for Python syntax errors",
            critical=True
        ):
            print("\n  Fix: Fix the syntax errors shown above")
            all_passed = False
    else:
        print("\n[Skipped] Flake8 not installed (pip install flake8 to enable)")

    # Summary
    print("\n" + "=" * 60)
    if all_passed:
        print("SUCCESS: Your code should pass CI!")
    else:
        print("FAILURE: Fix the issues above before pushing")
    print("=" * 60)

    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
