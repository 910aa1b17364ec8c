from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from dynaconf import Dynaconf

from dsci.config.defaults import DEFAULT_CONFIG
from dsci.config.models import DatasetCheckConfig, MonitoringConfig, Settings, SmokeConfig
from dsci.errors import ConfigError
from dsci.utils.config_io import deep_merge

CONFIG_FILE_NAMES = (
    "dsci.toml",
    "dsci.yaml",
    "dsci.yml",
    "dsci.json",
)


def _lower_keys(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_lower_keys(item) for item in obj]
    return obj


def _load_with_dynaconf(config_paths: list[Path]) -> dict[str, Any]:
    settings = Dynaconf(
        envvar_prefix="DSCI",
        settings_files=[str(path) for path in config_paths],
        merge_enabled=True,
        environments=False,
        load_dotenv=True,
    )
    return _lower_keys(settings.as_dict())


def coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _normalize(data: dict[str, Any]) -> Settings:
    dataset_data = data.get("dataset", {})
    smoke_data = data.get("smoke", {})
    monitoring_data = data.get("monitoring", {})

    try:
        settings = Settings(
            dataset=DatasetCheckConfig(
                image_dir=str(dataset_data["image_dir"]),
                label_dir=str(dataset_data["label_dir"]),
                require_non_empty=coerce_bool(dataset_data.get("require_non_empty", True)),
                display_cap=int(dataset_data["display_cap"]),
                workers=max(1, int(dataset_data.get("workers", 1))),
                report=_optional_str(dataset_data.get("report")),
            ),
            smoke=SmokeConfig(
                data_config=str(smoke_data["data_config"]),
                max_images=int(smoke_data["max_images"]),
                smoke_dir=str(smoke_data["smoke_dir"]),
                project_dir=str(smoke_data["project_dir"]),
                run_name=str(smoke_data["run_name"]),
            ),
            monitoring=MonitoringConfig(
                json_logs=coerce_bool(monitoring_data.get("json_logs", False)),
                log_level=str(monitoring_data.get("log_level", "INFO")).upper(),
                metrics_file=_optional_str(monitoring_data.get("metrics_file")),
            ),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid configuration value: {exc}") from exc

    if settings.dataset.display_cap < 0:
        raise ConfigError("dataset.display_cap must be >= 0")
    if settings.smoke.max_images < 1:
        raise ConfigError("smoke.max_images must be >= 1")
    return settings


def _default_config_copy() -> dict[str, Any]:
    return json.loads(json.dumps(DEFAULT_CONFIG))


def load_settings(
    work_dir: Path,
    config_path: str | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> Settings:
    """Defaults, then config files and ``DSCI_*`` env vars, then CLI overrides."""
    config_paths: list[Path] = []
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        config_paths.append(path)
    else:
        for name in CONFIG_FILE_NAMES:
            candidate = work_dir / name
            if candidate.exists():
                config_paths.append(candidate)

    merged = _default_config_copy()
    deep_merge(merged, _load_with_dynaconf(config_paths))

    if cli_overrides:
        deep_merge(merged, _lower_keys(cli_overrides))

    return _normalize(merged)
