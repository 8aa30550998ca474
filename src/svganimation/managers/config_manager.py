"""
Config Manager

Loads engine settings from YAML with include system support.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from svganimation.errors import ConfigurationError
from svganimation.models.enums import LogCategory
from svganimation.models.settings import EngineSettings
from svganimation.utils.logger import get_logger

log = get_logger().for_category(LogCategory.CONFIG)

SETTINGS_SECTION = "settings"


class ConfigManager:
    """
    YAML configuration with include system support

    Layout of config.yaml:

        include:
          - interface.yaml        # merged first, in order
        settings:
          fps: 30
          restartAtTheEnd: true   # camelCase or snake_case keys

    Keys of the main file are merged on top of the included files. When the
    file is missing or invalid the error is logged and the defaults are used
    (defaults_path when given, EngineSettings() otherwise).

    Example:
        config = ConfigManager("samples/planet_orbits/config.yaml")
        settings = config.load()
    """

    def __init__(self, config_path: Union[str, Path, None] = None, defaults_path: Union[str, Path, None] = None):
        self.config_path = Path(config_path) if config_path else None
        self.defaults_path = Path(defaults_path) if defaults_path else None
        self.data: Dict[str, Any] = {}
        self.settings = EngineSettings()
        self.used_defaults = False

    def load(self) -> EngineSettings:
        """
        Load and validate the configuration

        Process:
        1. Load main config file
        2. If it has 'include:' list, load and merge those files first
        3. Validate the 'settings' section into EngineSettings
        4. Fallback to defaults on failure

        Returns:
            Resolved EngineSettings
        """
        if self.config_path is None:
            log.info("No config file given, using defaults")
            return self._load_defaults()

        try:
            self.data = self._read(self.config_path)
            self.settings = EngineSettings.from_dict(self.data.get(SETTINGS_SECTION))
            self.used_defaults = False
            log.info("Configuration loaded", path=str(self.config_path), keys=str(list(self.data.keys())))

        except (OSError, yaml.YAMLError, ConfigurationError) as ex:
            log.error("Failed to load config", path=str(self.config_path), error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to defaults")
            return self._load_defaults()

        return self.settings

    def _read(self, path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            main_config = yaml.safe_load(f) or {}

        if not isinstance(main_config, dict):
            raise ConfigurationError.invalid_settings(f"{path.name} must contain a mapping")

        if "include" not in main_config:
            return main_config

        log.info("Using include-based configuration")
        merged = self._load_with_includes(main_config.pop("include") or [], path.parent)
        self._merge(merged, main_config)
        return merged

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: filenames relative to the main config's directory
            config_dir: directory containing config files

        Returns:
            Merged config dict
        """
        merged: Dict[str, Any] = {}

        if not isinstance(include_list, list):
            raise ConfigurationError.invalid_settings("'include' must be a list of file names")

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    file_data = yaml.safe_load(f)
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise

            if not file_data:
                continue
            if not isinstance(file_data, dict):
                raise ConfigurationError.invalid_settings(f"{filename} must contain a mapping")
            self._merge(merged, file_data)
            log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))

        log.info("Config merge complete", total_keys=len(merged))
        return merged

    @staticmethod
    def _merge(target: Dict[str, Any], source: Dict[str, Any]) -> None:
        # One level deep: sections such as 'settings' combine key by key
        for key, value in source.items():
            if isinstance(value, dict) and isinstance(target.get(key), dict):
                target[key] = {**target[key], **value}
            else:
                target[key] = value

    def _load_defaults(self) -> EngineSettings:
        self.used_defaults = True
        self.data = {}
        self.settings = EngineSettings()

        if self.defaults_path is None:
            return self.settings

        with open(self.defaults_path, "r", encoding="utf-8") as f:
            self.data = yaml.safe_load(f) or {}
        self.settings = EngineSettings.from_dict(self.data.get(SETTINGS_SECTION))
        log.info("Loaded defaults", path=str(self.defaults_path))
        return self.settings

    def get_section(self, name: str, default: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Raw section of the merged config (e.g. 'render' options for the CLI)"""
        return dict(self.data.get(name) or default or {})
