from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from dsci.constants import IMAGE_EXTS, LABEL_EXT
from dsci.dataset.rows import REASON_NOT_UTF8, REASON_UNREADABLE, find_invalid_rows
from dsci.dataset.types import REPORT_ORDER, Defect, DefectKind, ImageRecord, LabelRecord

_logger = logging.getLogger("dsci.dataset.scan")


def is_image_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in IMAGE_EXTS


def base_key_for(relative: Path) -> str:
    return relative.with_suffix("").as_posix()


def list_images(image_root: Path) -> list[ImageRecord]:
    records: list[ImageRecord] = []
    seen: dict[str, Path] = {}
    for path in sorted(image_root.rglob("*")):
        if not is_image_file(path):
            continue
        relative = path.relative_to(image_root)
        key = base_key_for(relative)
        if key in seen:
            _logger.warning(
                "images share base key=%s first=%s second=%s", key, seen[key], path
            )
        else:
            seen[key] = path
        records.append(ImageRecord(path=path, relative=relative, base_key=key))
    return records


def list_label_files(label_root: Path) -> list[Path]:
    return sorted(p for p in label_root.rglob(f"*{LABEL_EXT}") if p.is_file())


def label_path_for(image: ImageRecord, label_root: Path) -> Path:
    return (label_root / image.relative).with_suffix(LABEL_EXT)


def read_label(path: Path, base_key: str) -> LabelRecord:
    raw_lines = path.read_text(encoding="utf-8").splitlines()
    rows = tuple(line.strip() for line in raw_lines if line.strip())
    return LabelRecord(path=path, base_key=base_key, rows=rows)


def check_image(
    image: ImageRecord,
    label_root: Path,
    require_non_empty: bool = True,
) -> list[Defect]:
    label_path = label_path_for(image, label_root)
    if not label_path.is_file():
        return [Defect(kind=DefectKind.MISSING_LABEL, path=label_path)]

    try:
        label = read_label(label_path, image.base_key)
    except UnicodeDecodeError:
        return [Defect(kind=DefectKind.INVALID_ROW, path=label_path, line=1, reason=REASON_NOT_UTF8)]
    except OSError as exc:
        _logger.warning("label unreadable path=%s error=%s", label_path, exc)
        return [Defect(kind=DefectKind.INVALID_ROW, path=label_path, line=1, reason=REASON_UNREADABLE)]

    if not label.rows:
        if require_non_empty:
            return [Defect(kind=DefectKind.EMPTY_ANNOTATION, path=label_path)]
        return []

    return [
        Defect(kind=DefectKind.INVALID_ROW, path=label_path, line=line, reason=reason)
        for line, reason in find_invalid_rows(label.rows)
    ]


def check_images(
    images: Iterable[ImageRecord],
    label_root: Path,
    require_non_empty: bool = True,
    workers: int = 1,
) -> list[Defect]:
    """Image-anchored pass: label presence, emptiness and row validity."""
    images = list(images)
    defects: list[Defect] = []

    if workers > 1 and len(images) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = executor.map(
                lambda image: check_image(image, label_root, require_non_empty),
                images,
            )
            for found in results:
                defects.extend(found)
    else:
        for image in images:
            defects.extend(check_image(image, label_root, require_non_empty))

    return sorted(defects, key=lambda d: (REPORT_ORDER.index(d.kind), d.sort_key()))


def find_orphan_labels(
    label_files: Iterable[Path],
    label_root: Path,
    image_keys: set[str],
) -> list[Defect]:
    """Label-anchored pass: label files whose base key has no image."""
    orphans: list[Defect] = []
    for label_path in label_files:
        key = base_key_for(label_path.relative_to(label_root))
        if key not in image_keys:
            orphans.append(Defect(kind=DefectKind.ORPHAN_LABEL, path=label_path))
    return orphans
