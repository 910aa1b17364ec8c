from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from dsci.errors import ManifestError
from dsci.smoke.sources import classify_train_value, resolve_train_images

_logger = logging.getLogger("dsci.smoke")


@dataclass
class SmokeManifest:
    manifest_path: Path
    root: Path
    train_list: Path
    val_list: Path
    images: list[Path]
    requested: int

    @property
    def short(self) -> bool:
        return len(self.images) < self.requested


def load_manifest(data_config: Path) -> dict[str, Any]:
    if not data_config.is_file():
        raise ManifestError(f"Dataset YAML not found: {data_config}")
    try:
        cfg = yaml.safe_load(data_config.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ManifestError(f"Dataset YAML is not valid YAML: {exc}") from exc
    if not isinstance(cfg, dict):
        raise ManifestError("Dataset YAML must be a mapping")
    return cfg


def dataset_root(cfg: dict[str, Any], data_config: Path) -> Path:
    cfg_dir = data_config.resolve().parent
    root = cfg.get("path")
    if not root:
        return cfg_dir
    root = Path(root)
    if not root.is_absolute():
        root = (cfg_dir / root).resolve()
    return root


def _write_list(path: Path, images: list[Path]) -> None:
    path.write_text("\n".join(str(p) for p in images) + "\n", encoding="utf-8")


def build_smoke_manifest(data_config: Path, max_images: int, smoke_dir: Path) -> SmokeManifest:
    """Write a reduced copy of ``data_config`` limited to ``max_images`` train images.

    The same images serve as the validation split so a one-epoch training
    run has something to evaluate.
    """
    if max_images < 1:
        raise ManifestError(f"max_images must be positive, got {max_images}")

    data_config = Path(data_config).resolve()
    smoke_dir = Path(smoke_dir).resolve()
    cfg = load_manifest(data_config)
    root = dataset_root(cfg, data_config)

    sources = classify_train_value(cfg.get("train"), root)
    train_images = resolve_train_images(sources, root)
    if not train_images:
        raise ManifestError("No train images resolved from dataset YAML")

    selected = train_images[:max_images]
    _logger.info(
        "smoke manifest sources=%s resolved=%d selected=%d",
        [source.kind.value for source in sources],
        len(train_images),
        len(selected),
    )

    smoke_dir.mkdir(parents=True, exist_ok=True)
    train_txt = smoke_dir / "train.txt"
    val_txt = smoke_dir / "val.txt"
    _write_list(train_txt, selected)
    _write_list(val_txt, selected)

    smoke_cfg = dict(cfg)
    smoke_cfg["path"] = str(root)
    smoke_cfg["train"] = str(train_txt)
    smoke_cfg["val"] = str(val_txt)
    smoke_cfg.pop("test", None)

    smoke_yaml = smoke_dir / "data-smoke.yaml"
    smoke_yaml.write_text(yaml.safe_dump(smoke_cfg, sort_keys=False), encoding="utf-8")

    return SmokeManifest(
        manifest_path=smoke_yaml,
        root=root,
        train_list=train_txt,
        val_list=val_txt,
        images=selected,
        requested=max_images,
    )
