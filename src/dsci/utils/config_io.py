from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def deep_merge(base: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    for key, value in patch.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def prune_none(obj: Any) -> Any:
    """Drop ``None`` leaves so unset CLI flags do not mask config values."""
    if isinstance(obj, dict):
        cleaned = {k: prune_none(v) for k, v in obj.items() if v is not None}
        return {k: v for k, v in cleaned.items() if v != {}}
    return obj


def write_json(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=True, indent=2), encoding="utf-8")
