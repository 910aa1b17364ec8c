from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from dsci.errors import RunArtifactError

WEIGHT_NAMES = ("last.pt", "best.pt")


def smoke_run_name(run_name: str, env: Mapping[str, str] | None = None) -> str:
    env = os.environ if env is None else env
    run_id = env.get("GITHUB_RUN_ID") or "local"
    attempt = env.get("GITHUB_RUN_ATTEMPT") or "0"
    return f"{run_name}-{run_id}-{attempt}"


def verify_run_artifacts(run_dir: Path) -> Path:
    """Return the saved weights of a finished training run."""
    run_dir = Path(run_dir)
    if not run_dir.is_dir():
        raise RunArtifactError(f"Training did not produce run directory: {run_dir}")

    weights_dir = run_dir / "weights"
    for name in WEIGHT_NAMES:
        candidate = weights_dir / name
        if candidate.is_file():
            return candidate
    raise RunArtifactError(f"Training completed without saving weights in {weights_dir}")
