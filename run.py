#!/usr/bin/env python3
"""
Autocorrect - Development Launcher

Checks prerequisites and starts the FastAPI backend with uvicorn.

Usage:
    python run.py                    # Start the backend on localhost:8000
    python run.py --host 0.0.0.0     # Network accessible
    python run.py --port 9000        # Custom port
    python run.py --no-reload        # Disable auto-reload
    python run.py --check-only       # Run checks without starting

Environment Variables:
    - GEMINI_API_KEY: Required by /api/correct and /api/changetone (warning only)
"""

import argparse
import importlib.util
import os
import subprocess
import sys
from pathlib import Path
from typing import List

# ============================================================================
# Constants
# ============================================================================

PYTHON_MIN_VERSION = (3, 11)

DEFAULT_BACKEND_PORT = 8000
DEFAULT_HOST = 'localhost'

ROOT = Path(__file__).resolve().parent
BACKEND_DIR = ROOT / 'backend'

REQUIRED_MODULES = ['fastapi', 'uvicorn', 'httpx', 'pydantic_settings', 'slowapi', 'tenacity']


class CheckError(Exception):
    """A prerequisite is missing; the backend cannot start."""


class CheckWarning(Exception):
    """Something is off, but the backend can still start."""


# ============================================================================
# Prerequisite checks
# ============================================================================

class PrerequisiteChecker:
    """Runs the start-up checks and collects warnings."""

    def __init__(self, env: dict | None = None):
        self.env = os.environ if env is None else env
        self.warnings: List[str] = []

    def check_python_version(self):
        version = sys.version_info[:2]
        if version < PYTHON_MIN_VERSION:
            raise CheckError(
                f"Python {PYTHON_MIN_VERSION[0]}.{PYTHON_MIN_VERSION[1]}+ required, "
                f"found {version[0]}.{version[1]}"
            )

    def check_dependencies(self):
        missing = [name for name in REQUIRED_MODULES if importlib.util.find_spec(name) is None]
        if missing:
            raise CheckError(
                f"Missing Python packages: {', '.join(missing)}\n"
                "    Fix: pip install -e ."
            )

    def check_api_key(self):
        if not self.env.get('GEMINI_API_KEY'):
            raise CheckWarning(
                "GEMINI_API_KEY is not set; correction and tone requests will fail with 500"
            )

    def run_all(self) -> bool:
        """Run every check. Returns False when the backend cannot start."""
        ok = True
        for check in (self.check_python_version, self.check_dependencies, self.check_api_key):
            try:
                check()
            except CheckWarning as exc:
                self.warnings.append(str(exc))
                print(f"  ! {exc}")
            except CheckError as exc:
                ok = False
                print(f"  x {exc}")
        return ok


# ============================================================================
# Backend
# ============================================================================

def build_backend_command(host: str, port: int, reload: bool = True) -> List[str]:
    """Build the uvicorn command line for the backend."""
    cmd = [
        sys.executable,
        '-m', 'uvicorn',
        'app.main:app',
        '--port', str(port),
        '--host', host,
    ]
    if reload:
        cmd.append('--reload')
    return cmd


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description='Autocorrect - Development Launcher',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '--host',
        type=str,
        default=DEFAULT_HOST,
        help=f'Host to bind the backend to (default: {DEFAULT_HOST})'
    )
    parser.add_argument(
        '--port',
        type=int,
        default=DEFAULT_BACKEND_PORT,
        help=f'Backend port (default: {DEFAULT_BACKEND_PORT})'
    )
    parser.add_argument(
        '--no-reload',
        action='store_true',
        help='Disable uvicorn auto-reload'
    )
    parser.add_argument(
        '--skip-checks',
        action='store_true',
        help='Skip prerequisite checks (use with caution)'
    )
    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Run checks without starting the backend'
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    args = create_argument_parser().parse_args(argv)

    if not args.skip_checks:
        print("Checking prerequisites...")
        if not PrerequisiteChecker().run_all():
            return 1
        if args.check_only:
            print("All required checks passed.")
            return 0

    cmd = build_backend_command(args.host, args.port, reload=not args.no_reload)
    print(f"Starting backend on http://{args.host}:{args.port} ...")
    try:
        return subprocess.run(cmd, cwd=str(BACKEND_DIR)).returncode
    except KeyboardInterrupt:
        return 0


if __name__ == '__main__':
    sys.exit(main())
