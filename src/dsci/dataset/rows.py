from __future__ import annotations

import math

from dsci.dataset.types import AnnotationRow

REASON_COLUMNS = "expected 5 columns, found {count}"
REASON_CLASS_ID = "class id must be an integer >= 0"
REASON_NUMERIC = "coordinates must be finite numbers"
REASON_CENTER = "x_center and y_center must be in [0, 1]"
REASON_SIZE = "width and height must be in (0, 1]"
REASON_NOT_UTF8 = "label file is not valid UTF-8 text"
REASON_UNREADABLE = "label file could not be read"


def _parse_class_id(raw: str) -> int:
    # Integer-valued decimals ("1.0") count as integers.
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(REASON_CLASS_ID) from None
    if not value.is_integer() or value < 0:
        raise ValueError(REASON_CLASS_ID)
    return int(value)


def _parse_coordinate(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(REASON_NUMERIC) from None
    if not math.isfinite(value):
        raise ValueError(REASON_NUMERIC)
    return value


def parse_annotation_row(line: str) -> AnnotationRow:
    """Parse one normalized ``class x y w h`` row.

    Raises ``ValueError`` whose message is the first failing check, so every
    bad row maps to exactly one reason.
    """
    parts = line.split()
    if len(parts) != 5:
        raise ValueError(REASON_COLUMNS.format(count=len(parts)))

    class_id = _parse_class_id(parts[0])
    x, y, w, h = (_parse_coordinate(raw) for raw in parts[1:])

    if not (0.0 <= x <= 1.0 and 0.0 <= y <= 1.0):
        raise ValueError(REASON_CENTER)
    if not (0.0 < w <= 1.0 and 0.0 < h <= 1.0):
        raise ValueError(REASON_SIZE)

    return AnnotationRow(class_id=class_id, x_center=x, y_center=y, width=w, height=h)


def find_invalid_rows(rows: tuple[str, ...] | list[str]) -> list[tuple[int, str]]:
    """Return ``(line, reason)`` for each bad row; lines are 1-based."""
    invalid: list[tuple[int, str]] = []
    for idx, row in enumerate(rows, start=1):
        try:
            parse_annotation_row(row)
        except ValueError as exc:
            invalid.append((idx, str(exc)))
    return invalid
