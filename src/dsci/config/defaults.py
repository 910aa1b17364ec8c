from __future__ import annotations

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

DEFAULT_CONFIG: dict = {
    "dataset": {
        "image_dir": DEFAULT_IMAGE_DIR,
        "label_dir": DEFAULT_LABEL_DIR,
        "require_non_empty": True,
        "display_cap": DEFAULT_DISPLAY_CAP,
        "workers": 1,
        "report": None,
    },
    "smoke": {
        "data_config": DEFAULT_DATA_CONFIG,
        "max_images": DEFAULT_SMOKE_MAX_IMAGES,
        "smoke_dir": DEFAULT_SMOKE_DIR,
        "project_dir": DEFAULT_SMOKE_PROJECT_DIR,
        "run_name": DEFAULT_SMOKE_RUN_NAME,
    },
    "monitoring": {
        "json_logs": False,
        "log_level": "INFO",
        "metrics_file": None,
    },
}
