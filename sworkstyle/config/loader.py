"""
Icon configuration for sworkstyle.

Loads ``config.toml``:

    fallback = ''
    [matching]
    'firefox' = ''
    '/(?i)Github.*Firefox/' = ''

and maps window identities and titles to icons.
"""

import logging
import os
import re
import tomllib
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..errors import ConfigLoadError
from ..models import IconConfigFile, regex_pattern
from .defaults import DEFAULT_FALLBACK, DEFAULT_MATCHING

logger = logging.getLogger(__name__)


def default_config_path() -> Path:
    """Return ``$XDG_CONFIG_HOME/sworkstyle/config.toml``."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "sworkstyle" / "config.toml"


class ConfigLoader:
    """Loads the icon configuration from a TOML file."""

    def __init__(self, config_path: Path):
        """
        Initialize configuration loader.

        Args:
            config_path: Path to config.toml
        """
        self.config_path = config_path

    def load_toml(self) -> IconConfigFile:
        """
        Load and validate the configuration file.

        Returns:
            Parsed IconConfigFile

        Raises:
            ConfigLoadError: If the file can't be read, parsed or validated
        """
        try:
            with open(self.config_path, "rb") as f:
                data = tomllib.load(f)
        except OSError as e:
            raise ConfigLoadError(str(self.config_path), e.strerror or str(e)) from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigLoadError(str(self.config_path), f"invalid TOML: {e}") from e

        try:
            return IconConfigFile(**data)
        except ValidationError as e:
            raise ConfigLoadError(str(self.config_path), f"invalid configuration: {e}") from e


class IconConfig:
    """Immutable icon lookup table.

    Reloading builds a new instance; an instance is never modified after
    construction.
    """

    def __init__(self, fallback: str, matching: Dict[str, str]):
        self.fallback = fallback
        self._exact: Dict[str, str] = {}
        self._exact_folded: Dict[str, str] = {}
        self._regex: List[Tuple[re.Pattern, str]] = []

        for key, icon in matching.items():
            pattern = regex_pattern(key)
            if pattern is not None:
                self._regex.append((re.compile(pattern), icon))
            else:
                self._exact.setdefault(key, icon)
                self._exact_folded.setdefault(key.casefold(), icon)

    @classmethod
    def defaults(cls) -> "IconConfig":
        """Build the configuration from the built-in table only."""
        return cls(DEFAULT_FALLBACK, DEFAULT_MATCHING)

    @classmethod
    def from_file(cls, config: IconConfigFile) -> "IconConfig":
        """Build a configuration with user entries ahead of the defaults."""
        matching = dict(config.matching)
        for key, icon in DEFAULT_MATCHING.items():
            matching.setdefault(key, icon)

        fallback = config.fallback if config.fallback is not None else DEFAULT_FALLBACK
        return cls(fallback, matching)

    @classmethod
    def load(cls, config_path: Optional[Path]) -> "IconConfig":
        """
        Load configuration, falling back to the defaults on any problem.

        Args:
            config_path: Path to config.toml, or None for defaults

        Returns:
            IconConfig instance (never raises)
        """
        if config_path is None:
            return cls.defaults()

        if not config_path.exists():
            logger.debug(f"No config file at {config_path}, using defaults")
            return cls.defaults()

        try:
            config = cls.from_file(ConfigLoader(config_path).load_toml())
        except ConfigLoadError as e:
            logger.error(f"{e.message}; using default icons")
            logger.info(f"Suggestion: {e.suggestion}")
            return cls.defaults()

        logger.debug(f"Loaded {len(config)} icon rules from {config_path}")
        return config

    def __len__(self) -> int:
        return len(self._exact) + len(self._regex)

    def fetch_icon(self, exact_name: str, generic_name: Optional[str]) -> str:
        """
        Look up the icon for a window.

        Order: exact identity, /regex/ rules against the title and then the
        identity, case-insensitive identity, fallback.

        Args:
            exact_name: window class or app id, empty when unknown
            generic_name: window title

        Returns:
            Icon string
        """
        if exact_name and exact_name in self._exact:
            return self._exact[exact_name]

        for regex, icon in self._regex:
            if generic_name and regex.search(generic_name):
                return icon
            if exact_name and regex.search(exact_name):
                return icon

        if exact_name:
            icon = self._exact_folded.get(exact_name.casefold())
            if icon is not None:
                return icon

        return self.fallback
