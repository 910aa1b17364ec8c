from __future__ import annotations

from pathlib import Path

from prometheus_client import CollectorRegistry, Gauge, write_to_textfile

from dsci.dataset.types import REPORT_ORDER, ValidationReport


class ValidationMetrics:
    """Prometheus gauges for one validator run, exported as a textfile."""

    def __init__(self) -> None:
        self.registry = CollectorRegistry()
        self._images = Gauge(
            "dsci_dataset_images",
            "Images examined by the last validation run",
            registry=self.registry,
        )
        self._labels = Gauge(
            "dsci_dataset_label_files",
            "Label files found by the last validation run",
            registry=self.registry,
        )
        self._defects = Gauge(
            "dsci_dataset_defects",
            "Defects found by the last validation run",
            ["category"],
            registry=self.registry,
        )
        self._passed = Gauge(
            "dsci_dataset_passed",
            "1 when the last validation run passed, 0 otherwise",
            registry=self.registry,
        )

    def observe(self, report: ValidationReport) -> None:
        self._images.set(report.image_count)
        self._labels.set(report.label_count)
        grouped = report.grouped()
        for kind in REPORT_ORDER:
            self._defects.labels(category=kind.value).set(len(grouped[kind]))
        self._passed.set(1 if report.passed else 0)

    def write(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        write_to_textfile(str(path), self.registry)
