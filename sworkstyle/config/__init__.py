"""
Configuration subsystem for sworkstyle.

Modules:
- loader: Load config.toml and look up icons
- file_watcher: Monitor the configuration file for changes
- defaults: Built-in icon table
"""

from .loader import ConfigLoader, IconConfig, default_config_path
from .file_watcher import ConfigFileWatcher

__all__ = [
    "ConfigLoader",
    "IconConfig",
    "ConfigFileWatcher",
    "default_config_path",
]
