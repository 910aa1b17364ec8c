from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dsci.constants import IMAGE_EXTS
from dsci.errors import ManifestError

_GLOB_CHARS = "*?[]"


class SourceKind(str, Enum):
    GLOB = "glob"
    LIST_FILE = "list_file"
    DIRECTORY = "directory"
    MISSING = "missing"


@dataclass(frozen=True)
class TrainSource:
    """One classified entry of a manifest ``train`` value."""

    kind: SourceKind
    raw: str
    path: Path | None = None


def _is_image(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_EXTS


def _absolute(path_like: str | Path, base: Path) -> Path:
    p = Path(path_like)
    if not p.is_absolute():
        p = (base / p).resolve()
    return p


def classify_train_entry(entry: str, root: Path) -> TrainSource:
    if any(ch in entry for ch in _GLOB_CHARS):
        return TrainSource(kind=SourceKind.GLOB, raw=entry)

    path = _absolute(entry, root)
    if path.is_file():
        return TrainSource(kind=SourceKind.LIST_FILE, raw=entry, path=path)
    if path.is_dir():
        return TrainSource(kind=SourceKind.DIRECTORY, raw=entry, path=path)
    return TrainSource(kind=SourceKind.MISSING, raw=entry, path=path)


def classify_train_value(value: Any, root: Path) -> list[TrainSource]:
    """Classify a manifest ``train`` value into tagged sources.

    A string is a single source and a list is one source per string item.
    Non-string list items are skipped without complaint. Any other value
    type is rejected.
    """
    if value is None:
        raise ManifestError("Dataset YAML missing required 'train' key")
    if isinstance(value, str):
        return [classify_train_entry(value, root)]
    if isinstance(value, list):
        return [classify_train_entry(item, root) for item in value if isinstance(item, str)]
    raise ManifestError("Unsupported 'train' value in dataset YAML")


def _read_list_file(list_file: Path) -> list[Path]:
    lines = [ln.strip() for ln in list_file.read_text(encoding="utf-8").splitlines() if ln.strip()]
    out: list[Path] = []
    for line in lines:
        candidate = _absolute(line, list_file.parent)
        if candidate.exists() and _is_image(candidate):
            out.append(candidate)
    return out


def resolve_source(source: TrainSource, root: Path) -> list[Path]:
    if source.kind is SourceKind.GLOB:
        base, pattern = root, source.raw
        if Path(pattern).is_absolute():
            anchor = Path(Path(pattern).anchor)
            base, pattern = anchor, str(Path(pattern).relative_to(anchor))
        return sorted(p.resolve() for p in base.glob(pattern) if p.is_file() and _is_image(p))
    if source.kind is SourceKind.LIST_FILE:
        return _read_list_file(source.path)
    if source.kind is SourceKind.DIRECTORY:
        return sorted(p for p in source.path.rglob("*") if p.is_file() and _is_image(p))
    return []


def resolve_train_images(sources: list[TrainSource], root: Path) -> list[Path]:
    images: list[Path] = []
    for source in sources:
        images.extend(resolve_source(source, root))
    return sorted(dict.fromkeys(images))
