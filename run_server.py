#!/usr/bin/env python3
"""
Task Board Server Runner

Start the FastAPI server with configurable options. The server always binds to
all interfaces (0.0.0.0).

Usage:
    python run_server.py                    # Start with defaults (PORT or 8080)
    python run_server.py --no-reload        # Start without hot-reload
    python run_server.py --port 9000        # Start on custom port
"""

import argparse
import os
import subprocess
import sys

BIND_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


def resolve_port(raw: str | None, default: int = DEFAULT_PORT) -> int:
    """Return the port from ``raw`` or ``default`` when unset or not a number."""
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def check_dependencies() -> tuple[bool, list[str]]:
    """Check if required dependencies are installed."""
    missing = []

    try:
        import taskboard  # noqa: F401
    except ImportError:
        missing.append("taskboard (install with: pip install -e .)")

    try:
        import uvicorn  # noqa: F401
    except ImportError:
        missing.append("uvicorn (install with: pip install uvicorn[standard])")

    return len(missing) == 0, missing


def build_command(port: int, log_level: str, reload: bool) -> list[str]:
    cmd = [
        "uvicorn",
        "taskboard.main:app",
        "--host", BIND_HOST,
        "--port", str(port),
        "--log-level", log_level,
    ]
    if reload:
        cmd.append("--reload")
    return cmd


def build_env(log_level: str, base: dict[str, str] | None = None) -> dict[str, str]:
    """Environment for the server process; the app reads LOG_LEVEL from it."""
    env = dict(os.environ if base is None else base)
    env["LOG_LEVEL"] = log_level
    return env


def main() -> int:
    """Run the server with specified configuration."""
    parser = argparse.ArgumentParser(
        description="Start the Task Board server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--port",
        type=int,
        default=resolve_port(os.getenv("PORT")),
        help=f"Port to bind to (default: $PORT or {DEFAULT_PORT})",
    )
    parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable hot-reload (enabled by default in dev)",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "info").strip().lower(),
        choices=["critical", "error", "warning", "info", "debug", "trace"],
        help="Logging level (default: info)",
    )

    args = parser.parse_args()

    print("\033[0;32mChecking dependencies...\033[0m")
    deps_ok, missing = check_dependencies()
    if not deps_ok:
        print("\033[0;31mError: Missing required dependencies:\033[0m")
        for dep in missing:
            print(f"  - {dep}")
        return 1

    cmd = build_command(args.port, args.log_level, reload=not args.no_reload)

    print(f"Host: {BIND_HOST}")
    print(f"Port: {args.port}")
    print(f"Hot-reload: {not args.no_reload}")
    print(f"Log level: {args.log_level}")
    print()
    print("\033[0;32mStarting Task Board Server...\033[0m")
    print()

    try:
        subprocess.run(cmd, check=True, env=build_env(args.log_level))
        return 0
    except KeyboardInterrupt:
        print("\n\033[1;33mServer stopped by user\033[0m")
        return 0
    except subprocess.CalledProcessError as e:
        print(f"\033[0;31mError: Server exited with code {e.returncode}\033[0m")
        return e.returncode


if __name__ == "__main__":
    sys.exit(main())
