from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class DefectKind(str, Enum):
    """Defect categories, declared in report order."""

    MISSING_LABEL = "missing_label"
    EMPTY_ANNOTATION = "empty_annotation"
    INVALID_ROW = "invalid_row"
    ORPHAN_LABEL = "orphan_label"

    @property
    def heading(self) -> str:
        return _HEADINGS[self]


_HEADINGS = {
    DefectKind.MISSING_LABEL: "Missing label files:",
    DefectKind.EMPTY_ANNOTATION: "Empty annotation files:",
    DefectKind.INVALID_ROW: "Invalid YOLO rows:",
    DefectKind.ORPHAN_LABEL: "Orphan label files (no matching image):",
}

REPORT_ORDER: tuple[DefectKind, ...] = tuple(DefectKind)


@dataclass(frozen=True)
class ImageRecord:
    path: Path
    relative: Path
    base_key: str


@dataclass(frozen=True)
class LabelRecord:
    path: Path
    base_key: str
    rows: tuple[str, ...] = ()


@dataclass(frozen=True)
class AnnotationRow:
    class_id: int
    x_center: float
    y_center: float
    width: float
    height: float


@dataclass(frozen=True)
class Defect:
    kind: DefectKind
    path: Path
    line: int | None = None
    reason: str | None = None

    def sort_key(self) -> tuple[str, int]:
        return str(self.path), self.line or 0

    def describe(self) -> str:
        if self.kind is DefectKind.INVALID_ROW:
            return f"{self.path}:{self.line} -> {self.reason}"
        return str(self.path)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"kind": self.kind.value, "path": str(self.path)}
        if self.line is not None:
            payload["line"] = self.line
        if self.reason is not None:
            payload["reason"] = self.reason
        return payload


@dataclass
class ValidationReport:
    """Outcome of one validator run over an image root and a label root."""

    image_root: Path
    label_root: Path
    image_count: int
    label_count: int
    defects: list[Defect] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.defects

    @property
    def status(self) -> str:
        return "pass" if self.passed else "fail"

    def grouped(self) -> dict[DefectKind, list[Defect]]:
        groups: dict[DefectKind, list[Defect]] = {kind: [] for kind in REPORT_ORDER}
        for defect in self.defects:
            groups[defect.kind].append(defect)
        for kind in groups:
            groups[kind].sort(key=Defect.sort_key)
        return groups

    def counts(self) -> dict[str, int]:
        counts = {
            "images": self.image_count,
            "labels": self.label_count,
        }
        for kind, defects in self.grouped().items():
            counts[kind.value] = len(defects)
        return counts

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "image_root": str(self.image_root),
            "label_root": str(self.label_root),
            "counts": self.counts(),
            "defects": [
                defect.to_dict()
                for defects in self.grouped().values()
                for defect in defects
            ],
        }
