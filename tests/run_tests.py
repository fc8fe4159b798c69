#!/usr/bin/env python3
"""
Test runner script for the PetroData Nexus tests.

Wraps pytest with the suite selections used during development.
"""

import os
import sys
import subprocess
import argparse
from pathlib import Path


SUITES = {
    "all": ["tests/", "--cov=petrodata", "--cov-report=term-missing", "--cov-report=html"],
    "unit": ["tests/unit/"],
    "api": ["tests/api/"],
    "integration": ["tests/integration/"],
    "quick": ["tests/unit/test_period_aggregator.py", "tests/unit/test_csv_report_codec.py", "tests/api/test_health.py"],
}


def run_command(cmd, description="Running command"):
    """Run a command and handle the output."""
    print(f"\n🔄 {description}...")
    print(f"Command: {' '.join(cmd)}")
    print("-" * 50)

    try:
        result = subprocess.run(cmd, check=True, capture_output=False)
        print(f"✅ {description} completed successfully!")
        return result.returncode == 0
    except subprocess.CalledProcessError as e:
        print(f"❌ {description} failed with exit code {e.returncode}")
        return False
    except FileNotFoundError:
        print(f"❌ Command not found: {cmd[0]}")
        print("Make sure the test extra is installed: pip install -e .[test]")
        return False


def check_dependencies():
    """Check if test dependencies are installed."""
    print("🔍 Checking test dependencies...")

    for module in ["pytest", "pytest_asyncio", "pytest_cov", "httpx"]:
        try:
            __import__(module)
            print(f"✅ {module} is installed")
        except ImportError:
            print(f"❌ {module} is not installed")
            return False
    return True


def main():
    """Main function to handle command line arguments."""
    parser = argparse.ArgumentParser(description="Run PetroData Nexus tests")
    parser.add_argument(
        "test_type",
        nargs="?",
        choices=sorted(SUITES),
        default="all",
        help="Type of tests to run (default: all)"
    )
    parser.add_argument(
        "--marker", "-m",
        help="Run tests with specific marker"
    )

    args = parser.parse_args()

    # Change to the project root directory
    os.chdir(Path(__file__).parent.parent)

    print("🧪 PetroData Nexus Test Runner")
    print("=" * 50)

    if not check_dependencies():
        print("\n❌ Missing test dependencies. Install with: pip install -e .[test]")
        return 1

    cmd = ["pytest", "-v"] + SUITES[args.test_type]
    if args.marker:
        cmd += ["-m", args.marker]

    if run_command(cmd, f"Running {args.test_type} tests"):
        print("\n🎉 Tests completed successfully!")
        if args.test_type == "all":
            print("📊 Coverage report generated in htmlcov/index.html")
        return 0

    print("\n💥 Tests failed!")
    return 1


if __name__ == "__main__":
    sys.exit(main())
