#!/usr/bin/env python3
"""
Simple test runner for the shortlink service.
Run this to execute all tests; extra arguments are passed to pytest.
"""

import subprocess
import sys
import os

def run_tests(extra_args=None):
    """Run the test suite"""
    print("🧪 Running Shortlink Service Tests")
    print("=" * 40)

    # Change to project directory
    os.chdir(os.path.dirname(os.path.abspath(__file__)))

    # Keep rate limiting off and skip the Redis connection attempt
    env = dict(os.environ, ENVIRONMENT="test", RATE_LIMIT_BACKEND="null")

    try:
        # Run pytest
        subprocess.run([
            sys.executable, "-m", "pytest",
            "tests/",
            "-v",
            "--tb=short",
            *(extra_args or []),
        ], check=True, env=env)

        print("\n✅ All tests passed!")
        return 0

    except subprocess.CalledProcessError as e:
        print(f"\n❌ Tests failed with exit code {e.returncode}")
        return e.returncode
    except FileNotFoundError:
        print("❌ pytest not found. Install with: pip install -e '.[test]'")
        return 1

if __name__ == "__main__":
    sys.exit(run_tests(sys.argv[1:]))
