from __future__ import annotations

import logging
from pathlib import Path

from dsci.dataset.scan import check_images, find_orphan_labels, list_images, list_label_files
from dsci.dataset.types import ValidationReport
from dsci.errors import MissingDirectoryError, NoImagesError

_logger = logging.getLogger("dsci.dataset")


def _require_dir(path: Path, role: str) -> Path:
    if not path.is_dir():
        raise MissingDirectoryError(f"{role} directory does not exist: {path}")
    return path.resolve()


def validate_dataset(
    image_root: Path,
    label_root: Path,
    require_non_empty: bool = True,
    workers: int = 1,
) -> ValidationReport:
    """Cross-check an image tree against its YOLO label tree.

    Missing roots and an image root without images are fatal and raise a
    ``DatasetCIError``. Everything else is recorded as a defect in the
    returned report after a full pass over both trees.
    """
    image_root = _require_dir(Path(image_root), "Image")
    label_root = _require_dir(Path(label_root), "Label")

    images = list_images(image_root)
    if not images:
        raise NoImagesError(f"No images found in {image_root}")
    _logger.info("validating images=%d image_root=%s label_root=%s", len(images), image_root, label_root)

    defects = check_images(images, label_root, require_non_empty=require_non_empty, workers=workers)

    label_files = list_label_files(label_root)
    image_keys = {image.base_key for image in images}
    defects.extend(find_orphan_labels(label_files, label_root, image_keys))

    report = ValidationReport(
        image_root=image_root,
        label_root=label_root,
        image_count=len(images),
        label_count=len(label_files),
        defects=defects,
    )
    _logger.info(
        "validation finished status=%s counts=%s",
        report.status,
        report.counts(),
        extra={"context": {"status": report.status, **report.counts()}},
    )
    return report
