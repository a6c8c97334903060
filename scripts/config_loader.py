from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

DEFAULT_CONFIG_NAME = "config.default.yaml"
LOCAL_CONFIG_NAME = "config.yaml"

# Used when config.default.yaml is not shipped next to the scripts (wheel installs).
BUILTIN_DEFAULTS: Dict[str, Any] = {
    "logging": {"level": "info"},
    "reassembly": {"delimiter": ";", "min_fragment_length": 2},
    "report": {"path": ""},
}


def _read_config_file(path: Path) -> Dict[str, Any]:
    """Parse one config file; an empty file counts as no settings."""
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {path.name} must hold a mapping of sections, got {type(data).__name__}")
    return data


def deep_merge(base: Any, override: Any) -> Any:
    """Merge override onto base.

    - dicts merge recursively
    - lists are replaced whole
    - scalars override
    """
    if isinstance(base, dict) and isinstance(override, dict):
        merged: Dict[str, Any] = {}
        for key, value in base.items():
            merged[key] = deep_merge(value, override[key]) if key in override else value
        for key, value in override.items():
            if key not in base:
                merged[key] = value
        return merged
    return override


def load_default_and_local(
    base_dir: Path,
    default_name: str = DEFAULT_CONFIG_NAME,
    local_name: str = LOCAL_CONFIG_NAME,
) -> Tuple[Dict[str, Any], Dict[str, Any], bool]:
    """Read the committed defaults and the optional local overrides from ``base_dir``.

    A missing default file falls back to BUILTIN_DEFAULTS; a missing local file
    yields an empty mapping and ``has_local=False``.
    """
    default_path = base_dir / default_name
    if default_path.exists():
        default_cfg = deep_merge(BUILTIN_DEFAULTS, _read_config_file(default_path))
    else:
        default_cfg = deepcopy(BUILTIN_DEFAULTS)

    local_path = base_dir / local_name
    if local_path.exists():
        return default_cfg, _read_config_file(local_path), True
    return default_cfg, {}, False


def load_effective_config(
    base_dir: Path,
    default_name: str = DEFAULT_CONFIG_NAME,
    local_name: str = LOCAL_CONFIG_NAME,
) -> Tuple[Dict[str, Any], bool]:
    default_cfg, local_cfg, has_local = load_default_and_local(
        base_dir, default_name=default_name, local_name=local_name
    )
    return deep_merge(default_cfg, local_cfg), has_local


def config_log_level(cfg: Dict[str, Any]) -> str:
    section = cfg.get("logging") if isinstance(cfg.get("logging"), dict) else {}
    return str(section.get("level") or "info").strip().lower()


def config_report_path(cfg: Dict[str, Any]) -> str:
    section = cfg.get("report") if isinstance(cfg.get("report"), dict) else {}
    return str(section.get("path") or "").strip()
