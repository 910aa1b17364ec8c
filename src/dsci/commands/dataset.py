from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from dsci.commands.common import load_command_settings, resolve_path
from dsci.constants import EXIT_DEFECTS, EXIT_FATAL, EXIT_OK
from dsci.dataset.report import render_report
from dsci.dataset.validate import validate_dataset
from dsci.errors import DatasetCIError
from dsci.monitoring import ValidationMetrics, emit_error, emit_lines
from dsci.utils.config_io import write_json

_logger = logging.getLogger("dsci.commands.dataset")


def _parse_flag(raw: str | None) -> bool | None:
    if raw is None:
        return None
    return raw.strip().lower() == "true"


def _run_check(args: Any, work_dir: Path) -> int:
    settings = load_command_settings(
        args,
        work_dir,
        {
            "dataset": {
                "image_dir": args.image_dir,
                "label_dir": args.label_dir,
                "require_non_empty": _parse_flag(args.require_non_empty),
                "display_cap": args.display_cap,
                "workers": args.workers,
                "report": args.report,
            },
            "monitoring": {"metrics_file": args.metrics_file},
        },
    )
    cfg = settings.dataset

    image_dir = resolve_path(cfg.image_dir, work_dir)
    label_dir = resolve_path(cfg.label_dir, work_dir)
    print("Checking dataset structure...")
    print(f"Image directory: {cfg.image_dir}")
    print(f"Label directory: {cfg.label_dir}")
    _logger.debug("dataset check settings=%s", settings.as_log_context())

    report = validate_dataset(
        image_dir,
        label_dir,
        require_non_empty=cfg.require_non_empty,
        workers=cfg.workers,
    )
    emit_lines(render_report(report, display_cap=cfg.display_cap))

    if cfg.report:
        report_path = resolve_path(cfg.report, work_dir)
        write_json(report_path, report.to_dict())
        _logger.info("report written path=%s", report_path)

    if settings.monitoring.metrics_file:
        metrics = ValidationMetrics()
        metrics.observe(report)
        metrics_path = resolve_path(settings.monitoring.metrics_file, work_dir)
        metrics.write(metrics_path)
        _logger.info("metrics written path=%s", metrics_path)

    return EXIT_OK if report.passed else EXIT_DEFECTS


def run_dataset(args: Any, work_dir: Path) -> int:
    try:
        if args.dataset_command == "check":
            return _run_check(args, work_dir)
        raise DatasetCIError(f"Unsupported dataset command: {args.dataset_command}")
    except DatasetCIError as exc:
        emit_error(str(exc))
        return EXIT_FATAL
    except Exception as exc:
        _logger.debug("dataset command failed", exc_info=True)
        emit_error(f"dataset command failed: {exc}")
        return EXIT_FATAL
