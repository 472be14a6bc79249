"""Startup checks for the courtrota command-line tools.

Scripts call ``validate_runtime()`` before importing the engine so a wrong
interpreter or a half-installed environment fails with one readable message
instead of an ImportError deep inside a round.
"""

from __future__ import annotations

import importlib.util
import sys
from collections.abc import Sequence

MIN_PYTHON = (3, 10)
DEFAULT_REQUIRED_MODULES = (
    "pydantic",
    "numpy",
    "sqlalchemy",
)
INSTALL_HINT = 'Install courtrota into a virtualenv with `python -m pip install -e ".[dev]"`.'


def _dotted(version: tuple[int, int]) -> str:
    return ".".join(str(part) for part in version)


def missing_modules(required_modules: Sequence[str]) -> list[str]:
    """Names from ``required_modules`` that cannot be imported, sorted."""
    return sorted(name for name in required_modules if importlib.util.find_spec(name) is None)


def validate_runtime(
    min_python: tuple[int, int] = MIN_PYTHON,
    required_modules: Sequence[str] = DEFAULT_REQUIRED_MODULES,
    python_version: tuple[int, int] | None = None,
) -> None:
    """Check the interpreter version and the session engine's dependencies.

    Raises:
        RuntimeError: If Python is older than ``min_python`` or a required
            module is not installed.
    """
    running = python_version or sys.version_info[:2]
    if tuple(running) < min_python:
        raise RuntimeError(
            f"courtrota needs Python >={_dotted(min_python)} to plan sessions, "
            f"but this interpreter is {_dotted(running)}. {INSTALL_HINT}"
        )

    absent = missing_modules(required_modules)
    if absent:
        raise RuntimeError(
            f"courtrota cannot start, these packages are not installed: "
            f"{', '.join(absent)}. {INSTALL_HINT}"
        )
