#!/usr/bin/env python3
"""
Development scripts for the wynn-di project.

Each command runs one or more tools through uv:

    python scripts.py test|lint|typecheck|demos|readme|check
"""

import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

PACKAGE_DIR = "src/wynn/di/"


def run_command(cmd: list[str], description: str) -> bool:
    """Run a command and return True if successful."""
    print(f"\n>> {description}: {' '.join(cmd)}")

    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        print(f"FAILED {description} (exit code {e.returncode})")
        return False
    except FileNotFoundError:
        print(f"FAILED {description}: command not found: {cmd[0]}")
        return False

    print(f"OK {description}")
    return True


def run_all(commands: list[tuple[list[str], str]]) -> int:
    results = [run_command(cmd, desc) for cmd, desc in commands]
    return 0 if all(results) else 1


def run_tests() -> int:
    return run_all([(["uv", "run", "pytest", "-v"], "Tests")])


def run_lint() -> int:
    return run_all(
        [
            (["uv", "run", "ruff", "check", "."], "Ruff linting"),
            (["uv", "run", "ruff", "format", "--check", "."], "Ruff formatting"),
        ]
    )


def run_typecheck() -> int:
    return run_all(
        [
            (["uv", "run", "mypy", PACKAGE_DIR], "MyPy type checking"),
            (["uv", "run", "pyright", PACKAGE_DIR], "Pyright type checking"),
        ]
    )


def run_demos() -> int:
    """Run every demo script that is not prefixed with an underscore."""
    demos = sorted(p for p in Path("demo").glob("*.py") if not p.name.startswith("_"))
    if not demos:
        print("No demo scripts found")
        return 1

    return run_all([(["uv", "run", "python", str(p)], f"Demo {p.name}") for p in demos])


def run_readme_validation() -> int:
    """Run the README code blocks as tests via phmdoctest."""
    test_file = Path("test_readme.py")
    try:
        if not run_command(
            ["uv", "run", "phmdoctest", "README.md", "--outfile", str(test_file)],
            "Generating README tests",
        ):
            return 1
        return run_all([(["uv", "run", "pytest", str(test_file), "-v"], "README examples")])
    finally:
        test_file.unlink(missing_ok=True)


COMMANDS: dict[str, Callable[[], int]] = {
    "test": run_tests,
    "lint": run_lint,
    "typecheck": run_typecheck,
    "demos": run_demos,
    "readme": run_readme_validation,
}


def check_all() -> int:
    """Run every command and print a summary."""
    results = {name: func() == 0 for name, func in COMMANDS.items()}

    print("\nSummary")
    for name, passed in results.items():
        print(f"  {name:<12} {'PASS' if passed else 'FAIL'}")

    return 0 if all(results.values()) else 1


if __name__ == "__main__":
    commands = {**COMMANDS, "check": check_all}
    if len(sys.argv) != 2 or sys.argv[1] not in commands:
        print(f"Usage: python scripts.py <{'|'.join(commands)}>")
        sys.exit(1)
    sys.exit(commands[sys.argv[1]]())
