from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from dsci.commands.common import load_command_settings, resolve_path
from dsci.constants import EXIT_FATAL, EXIT_OK
from dsci.errors import DatasetCIError
from dsci.monitoring import emit_error, emit_warning
from dsci.smoke.manifest import build_smoke_manifest
from dsci.smoke.runs import smoke_run_name, verify_run_artifacts

_logger = logging.getLogger("dsci.commands.smoke")


def _run_prepare(args: Any, work_dir: Path) -> int:
    settings = load_command_settings(
        args,
        work_dir,
        {
            "smoke": {
                "data_config": args.data_config,
                "max_images": args.max_images,
                "smoke_dir": args.smoke_dir,
            },
        },
    )
    cfg = settings.smoke
    manifest = build_smoke_manifest(
        data_config=resolve_path(cfg.data_config, work_dir),
        max_images=cfg.max_images,
        smoke_dir=resolve_path(cfg.smoke_dir, work_dir),
    )
    if manifest.short:
        emit_warning(
            f"Requested {manifest.requested} images but found {len(manifest.images)}; "
            "continuing with available images."
        )
    # Sole stdout line; shell wrappers capture it.
    print(str(manifest.manifest_path))
    return EXIT_OK


def _run_verify(args: Any, work_dir: Path) -> int:
    settings = load_command_settings(
        args,
        work_dir,
        {
            "smoke": {
                "run_name": args.run_name,
                "project_dir": args.project_dir,
            },
        },
    )
    cfg = settings.smoke
    full_name = smoke_run_name(cfg.run_name)
    run_dir = resolve_path(cfg.project_dir, work_dir) / full_name
    weights = verify_run_artifacts(run_dir)
    _logger.info("smoke run verified run_dir=%s weights=%s", run_dir, weights)
    print("Smoke training succeeded and weights were saved.")
    return EXIT_OK


def run_smoke(args: Any, work_dir: Path) -> int:
    try:
        if args.smoke_command == "prepare":
            return _run_prepare(args, work_dir)
        if args.smoke_command == "verify":
            return _run_verify(args, work_dir)
        raise DatasetCIError(f"Unsupported smoke command: {args.smoke_command}")
    except DatasetCIError as exc:
        emit_error(str(exc))
        return EXIT_FATAL
    except Exception as exc:
        _logger.debug("smoke command failed", exc_info=True)
        emit_error(f"smoke command failed: {exc}")
        return EXIT_FATAL
