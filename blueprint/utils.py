"""
Utility functions for the blueprint library.
"""

from __future__ import annotations

import linecache
import os
import sys
from dataclasses import dataclass, field
from typing import Any

# Environment variable to control debug mode
DEBUG_BLUEPRINT = os.environ.get("BLUEPRINT_DEBUG", "").lower() in ("1", "true", "yes")


_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


def _is_blueprint_internal(path: str) -> bool:
    if path.startswith("<"):
        return False
    return os.path.dirname(os.path.abspath(path)) == _PACKAGE_DIR


@dataclass(frozen=True)
class CreationContext:
    """Source location where a suspension reason was registered."""

    filename: str
    line: int
    function: str
    code: str | None = None
    stack_trace: list[dict[str, Any]] = field(default_factory=list, compare=False, repr=False)

    def __str__(self) -> str:
        location = f"{self.filename}:{self.line} in {self.function}"
        if self.code:
            location += f" -> {self.code}"
        lines = [location]
        for frame in self.stack_trace:
            lines.append(f"  {frame['filename']}:{frame['line']} in {frame['function']}")
        return "\n".join(lines)


def capture_creation_context(skip_frames: int = 2) -> CreationContext | None:
    """
    Capture the first frame outside this package, starting ``skip_frames`` up.

    With ``BLUEPRINT_DEBUG`` enabled the callers of that frame are recorded too.
    """
    try:
        frame = sys._getframe(skip_frames)
    except ValueError:
        return None

    while frame is not None and _is_blueprint_internal(frame.f_code.co_filename):
        frame = frame.f_back
    if frame is None:
        return None

    filename = frame.f_code.co_filename
    line = frame.f_lineno
    code = linecache.getline(filename, line).strip() or None

    stack_data: list[dict[str, Any]] = []
    if DEBUG_BLUEPRINT:
        current = frame.f_back
        while current is not None and len(stack_data) < 12:
            stack_data.append(
                {
                    "filename": current.f_code.co_filename,
                    "line": current.f_lineno,
                    "function": current.f_code.co_name,
                }
            )
            current = current.f_back

    return CreationContext(
        filename=filename,
        line=line,
        function=frame.f_code.co_name,
        code=code,
        stack_trace=stack_data,
    )


__all__ = [
    "DEBUG_BLUEPRINT",
    "CreationContext",
    "capture_creation_context",
]
