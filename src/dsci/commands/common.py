from __future__ import annotations

from pathlib import Path
from typing import Any

from dsci.config.loader import load_settings
from dsci.config.models import Settings
from dsci.monitoring import configure_logging
from dsci.utils.config_io import prune_none


def resolve_path(value: str | Path, work_dir: Path) -> Path:
    p = Path(value)
    if not p.is_absolute():
        p = (work_dir / p).resolve()
    return p


def load_command_settings(args: Any, work_dir: Path, overrides: dict[str, Any]) -> Settings:
    overrides = dict(overrides)
    monitoring = dict(overrides.get("monitoring", {}))
    monitoring.update(json_logs=args.json_logs, log_level=args.log_level)
    overrides["monitoring"] = monitoring
    settings = load_settings(
        work_dir=work_dir,
        config_path=args.config,
        cli_overrides=prune_none(overrides),
    )
    configure_logging(settings.monitoring.log_level, settings.monitoring.json_logs)
    return settings
