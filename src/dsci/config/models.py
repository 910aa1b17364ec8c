from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from dsci.constants import (
    DEFAULT_DATA_CONFIG,
    DEFAULT_DISPLAY_CAP,
    DEFAULT_IMAGE_DIR,
    DEFAULT_LABEL_DIR,
    DEFAULT_SMOKE_DIR,
    DEFAULT_SMOKE_MAX_IMAGES,
    DEFAULT_SMOKE_PROJECT_DIR,
    DEFAULT_SMOKE_RUN_NAME,
)


@dataclass
class DatasetCheckConfig:
    image_dir: str = DEFAULT_IMAGE_DIR
    label_dir: str = DEFAULT_LABEL_DIR
    require_non_empty: bool = True
    display_cap: int = DEFAULT_DISPLAY_CAP
    workers: int = 1
    report: str | None = None


@dataclass
class SmokeConfig:
    data_config: str = DEFAULT_DATA_CONFIG
    max_images: int = DEFAULT_SMOKE_MAX_IMAGES
    smoke_dir: str = DEFAULT_SMOKE_DIR
    project_dir: str = DEFAULT_SMOKE_PROJECT_DIR
    run_name: str = DEFAULT_SMOKE_RUN_NAME


@dataclass
class MonitoringConfig:
    json_logs: bool = False
    log_level: str = "INFO"
    metrics_file: str | None = None


@dataclass
class Settings:
    dataset: DatasetCheckConfig = field(default_factory=DatasetCheckConfig)
    smoke: SmokeConfig = field(default_factory=SmokeConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)

    def as_log_context(self) -> dict[str, Any]:
        return {
            "image_dir": self.dataset.image_dir,
            "label_dir": self.dataset.label_dir,
            "require_non_empty": self.dataset.require_non_empty,
            "workers": self.dataset.workers,
            "json_logs": self.monitoring.json_logs,
        }
