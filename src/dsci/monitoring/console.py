from __future__ import annotations

import sys
from typing import TextIO

from dsci.constants import ERROR_MARKER, WARNING_MARKER


def emit_error(message: str, stream: TextIO | None = None) -> None:
    """Print a CI error annotation (``::error::``) line."""
    print(f"{ERROR_MARKER}{message}", file=stream or sys.stdout)


def emit_warning(message: str, stream: TextIO | None = None) -> None:
    print(f"{WARNING_MARKER}{message}", file=stream or sys.stderr)


def emit_lines(lines: list[str], stream: TextIO | None = None) -> None:
    out = stream or sys.stdout
    for line in lines:
        print(line, file=out)
