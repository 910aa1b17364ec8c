from __future__ import annotations

import argparse
from pathlib import Path


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to TOML/YAML/JSON config file")
    parser.add_argument("--json-logs", action="store_true", default=None, help="Emit structured JSON logs")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log level")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dsci",
        description="Dataset integrity checks and training smoke helpers for CI",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    dataset = subparsers.add_parser("dataset", help="YOLO dataset integrity checks")
    dataset_sub = dataset.add_subparsers(dest="dataset_command", required=True)

    ds_check = dataset_sub.add_parser(
        "check",
        help="Cross-check images against YOLO label files and validate every row",
    )
    ds_check.add_argument("image_dir", nargs="?", help="Image root (default datasets/images)")
    ds_check.add_argument("label_dir", nargs="?", help="Label root (default datasets/labels)")
    ds_check.add_argument(
        "require_non_empty",
        nargs="?",
        help="'true' (any case) to flag label files without rows; anything else allows them",
    )
    ds_check.add_argument("--report", help="Write the full report as JSON to this path")
    ds_check.add_argument("--metrics-file", help="Write Prometheus textfile metrics to this path")
    ds_check.add_argument("--display-cap", type=int, help="Entries shown per defect category (default 100)")
    ds_check.add_argument("--workers", type=int, help="Threads used to validate label files")
    _add_common_args(ds_check)

    smoke = subparsers.add_parser("smoke", help="Training smoke-test dataset helpers")
    smoke_sub = smoke.add_subparsers(dest="smoke_command", required=True)

    sm_prepare = smoke_sub.add_parser(
        "prepare",
        help="Write a reduced dataset YAML capped to a few train images",
    )
    sm_prepare.add_argument("data_config", nargs="?", help="Dataset YAML (default datasets/data.yaml)")
    sm_prepare.add_argument("--max-images", type=int, help="Maximum train images (default 5)")
    sm_prepare.add_argument("--smoke-dir", help="Output directory (default .ci/smoke-dataset)")
    _add_common_args(sm_prepare)

    sm_verify = smoke_sub.add_parser(
        "verify",
        help="Check that a smoke training run produced its run directory and weights",
    )
    sm_verify.add_argument("run_name", nargs="?", help="Run name prefix (default smoke)")
    sm_verify.add_argument("--project-dir", help="Training project directory (default ci-smoke-runs)")
    _add_common_args(sm_verify)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    work_dir = Path.cwd()

    if args.command == "dataset":
        from dsci.commands.dataset import run_dataset

        return run_dataset(args, work_dir)
    if args.command == "smoke":
        from dsci.commands.smoke import run_smoke

        return run_smoke(args, work_dir)

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
