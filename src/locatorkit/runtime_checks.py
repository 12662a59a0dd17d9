from __future__ import annotations

import re
import sys

MIN_PYTHON = (3, 11)

# Playwright phrases its "browser not downloaded" failures a few different ways.
_MISSING_BROWSER = re.compile(
    r"executable (doesn't|does not) exist|playwright install|download new browsers|could not find browser",
    re.IGNORECASE,
)


def is_missing_browser_error(exc: BaseException) -> bool:
    return _MISSING_BROWSER.search(str(exc)) is not None


def interpreter_problem(version_info: tuple[int, ...] | None = None) -> str | None:
    current = tuple(version_info or sys.version_info[:3])
    if current[:2] >= MIN_PYTHON:
        return None
    found = ".".join(str(part) for part in current[:3])
    return (
        f"locatorkit requires Python {MIN_PYTHON[0]}.{MIN_PYTHON[1]}+. "
        f"Current interpreter: {sys.executable} (Python {found})"
    )
