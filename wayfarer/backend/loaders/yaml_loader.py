"""YAML loader for game scripts and settings."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from ..actions import builtin_actions
from ..config import ENV_SCRIPT_DIR, GameConfig
from ..errors import ScriptFormatError
from ..models.script import ScriptData
from ..script_source import ScriptSource
from ..systems.action_dispatcher import ActionRegistry

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def get_settings_path() -> Path:
    """Get the path to the script directory (WAYFARER_SCRIPT_DIR or the bundled one)."""
    override = os.environ.get(ENV_SCRIPT_DIR)
    if override:
        return Path(override)
    # 从 backend/loaders/ 向上两级到 wayfarer，再进入 settings
    return Path(__file__).parent.parent.parent / "settings"


def load_yaml_file(filepath: Path) -> Dict[str, Any]:
    """Load a single YAML file."""
    with open(filepath, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ScriptFormatError(f"{filepath}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ScriptFormatError(f"{filepath}: expected a mapping at top level")
    return data


def load_yaml_directory(directory: Path) -> List[Dict[str, Any]]:
    """Load all YAML files from a directory."""
    results = []
    if not directory.exists():
        return results

    for filepath in sorted(directory.glob("*.yaml")) + sorted(directory.glob("*.yml")):
        data = load_yaml_file(filepath)
        if data:
            results.append(data)

    return results


def load_config(directory: Optional[PathLike] = None) -> GameConfig:
    """Load config.yaml (if any) and apply environment overrides."""
    settings_path = Path(directory) if directory else get_settings_path()
    config_file = settings_path / "config.yaml"
    data = load_yaml_file(config_file) if config_file.exists() else {}
    return GameConfig.from_dict(data).with_env()


def load_sites(directory: Path) -> List[Dict[str, Any]]:
    """Load all site mappings; a file holds one site or a `sites` list."""
    sites: List[Dict[str, Any]] = []
    for site_data in load_yaml_directory(directory / "sites"):
        if "sites" in site_data:
            sites.extend(site_data["sites"] or [])
        else:
            sites.append(site_data)
    return sites


def load_events(directory: Path) -> List[Dict[str, Any]]:
    """Load the top-level events."""
    events: List[Dict[str, Any]] = []
    for event_file_data in load_yaml_directory(directory / "events"):
        events.extend(event_file_data.get("events") or [])
    return events


def load_script(path: Optional[PathLike] = None) -> ScriptData:
    """
    加载游戏脚本

    Args:
        path: 脚本目录（entry.yaml + sites/ + events/）或单个 YAML 文件
    """
    path = Path(path) if path else get_settings_path()
    if path.is_file():
        data = load_yaml_file(path)
    elif path.is_dir():
        entry_file = path / "entry.yaml"
        data = {
            "entry": load_yaml_file(entry_file) if entry_file.exists() else None,
            "sites": load_sites(path),
            "events": load_events(path),
        }
    else:
        raise ScriptFormatError(f"script not found: {path}")

    script = ScriptData.from_dict(data)
    logger.info("loaded script %s: %d sites, %d events", path, len(script.sites), len(script.events))
    return script


def load_script_source(
    path: Optional[PathLike] = None,
    registry: Optional[ActionRegistry] = None,
) -> ScriptSource:
    """Load a script and pair it with the built-in actions plus ``registry``."""
    return ScriptSource(data=load_script(path), registry=builtin_actions.merge(registry))


def load_all_settings(
    path: Optional[PathLike] = None,
    registry: Optional[ActionRegistry] = None,
) -> Tuple[ScriptSource, GameConfig]:
    """Load the script source and config at once."""
    path = Path(path) if path else get_settings_path()
    config_dir = path if path.is_dir() else path.parent
    return load_script_source(path, registry), load_config(config_dir)
