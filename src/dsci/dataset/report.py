from __future__ import annotations

from dsci.constants import DEFAULT_DISPLAY_CAP, ERROR_MARKER
from dsci.dataset.types import ValidationReport


def render_report(report: ValidationReport, display_cap: int = DEFAULT_DISPLAY_CAP) -> list[str]:
    """Console lines for a report; each category shows at most ``display_cap`` entries."""
    lines: list[str] = []
    for kind, defects in report.grouped().items():
        if not defects:
            continue
        lines.append(f"{ERROR_MARKER}{kind.heading}")
        for defect in defects[:display_cap]:
            lines.append(f"  - {defect.describe()}")
        if len(defects) > display_cap:
            lines.append(f"  …and {len(defects) - display_cap} more")

    if report.passed:
        lines.append(
            f"Dataset OK: {report.image_count} images, "
            f"{report.label_count} label files validated."
        )
    return lines
