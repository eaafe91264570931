"""Configuration loading for the kernel runtime."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {"level": "INFO", "buffer_size": 500},
    "kernel": {"name": "workbox.kernel.applicationmanager", "main_view_id": "main-view"},
    "remote": {"reserve_pending_slot": True},
    "applications": [],
}


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_effective_config(root: Path) -> dict[str, Any]:
    """Load and merge built-in defaults with the files under ``root/config``."""
    config_dir = root / "config"
    default_cfg = load_yaml(config_dir / "default.yaml")
    apps_cfg = load_yaml(config_dir / "applications.yaml")

    merged = merge_dicts(DEFAULT_CONFIG, default_cfg)
    applications = apps_cfg.get("applications", [])
    if not isinstance(applications, list):
        raise ValueError("applications.yaml: 'applications' must be a list.")
    if applications:
        merged["applications"] = list(merged.get("applications", [])) + applications
    return merged
