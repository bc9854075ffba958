"""Script and configuration loaders."""

from .yaml_loader import (
    get_settings_path,
    load_all_settings,
    load_config,
    load_events,
    load_script,
    load_script_source,
    load_sites,
)

__all__ = [
    "get_settings_path",
    "load_all_settings",
    "load_config",
    "load_events",
    "load_script",
    "load_script_source",
    "load_sites",
]
