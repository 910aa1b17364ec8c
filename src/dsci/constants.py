from __future__ import annotations

IMAGE_EXTS: frozenset[str] = frozenset(
    {".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff", ".webp"}
)
LABEL_EXT = ".txt"

DEFAULT_IMAGE_DIR = "datasets/images"
DEFAULT_LABEL_DIR = "datasets/labels"
DEFAULT_DISPLAY_CAP = 100

DEFAULT_DATA_CONFIG = "datasets/data.yaml"
DEFAULT_SMOKE_DIR = ".ci/smoke-dataset"
DEFAULT_SMOKE_MAX_IMAGES = 5
DEFAULT_SMOKE_PROJECT_DIR = "ci-smoke-runs"
DEFAULT_SMOKE_RUN_NAME = "smoke"

ERROR_MARKER = "::error::"
WARNING_MARKER = "::warning::"

EXIT_OK = 0
EXIT_DEFECTS = 1
EXIT_FATAL = 2
