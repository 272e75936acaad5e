"""Configuration file loading and management

The optional YAML file only tunes tool invocation and logging. Chosen
scaling values are never written to it.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from hyprscale.common.errors import ConfigError


DEFAULT_LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class DetectionConfig:
    """External tool invocation settings"""
    tool_timeout_seconds: float = 5.0
    apply_timeout_seconds: float = 5.0


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration settings"""
    level: str = "WARNING"
    file: Optional[str] = None
    format: str = DEFAULT_LOG_FORMAT


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration

    Built once at startup and passed explicitly to the detector, the
    applier, and the runtime loop.
    """
    no_hyprland_check: bool = False
    debug_mode: bool = False
    force_live_mode: bool = False
    is_test_mode: bool = False
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """Loads and parses configuration from YAML files"""

    DEFAULT_CONFIG_PATHS = [
        "hyprscale.yml",
        "~/.config/hyprscale/config.yml",
    ]

    @staticmethod
    def configFile_find() -> Optional[Path]:
        """
        Find configuration file in standard locations

        Returns:
            Path to config file, or None if not found
        """
        for config_path in ConfigLoader.DEFAULT_CONFIG_PATHS:
            path = Path(config_path).expanduser().resolve()
            if path.exists() and path.is_file():
                return path
        return None

    @staticmethod
    def yaml_load(file_path: Path) -> Dict[str, Any]:
        """
        Load YAML configuration file

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError: If file does not exist
            ConfigError: If file is not valid YAML or not a mapping
        """
        with open(file_path, "r") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ConfigError(f"Config file {file_path} is not valid YAML: {exc}") from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {file_path} must contain a YAML dictionary")

        return data

    @staticmethod
    def config_parse(data: Dict[str, Any]) -> AppConfig:
        """
        Parse configuration dictionary into AppConfig object

        Every key is optional; missing keys take the dataclass defaults.

        Args:
            data: Raw configuration dictionary

        Returns:
            Parsed AppConfig object

        Raises:
            ConfigError: If a section is not a mapping or a value has the wrong type
        """
        detection_data = ConfigLoader._section_get(data, "detection")
        defaults = DetectionConfig()
        detection = DetectionConfig(
            tool_timeout_seconds=ConfigLoader._positiveFloat_get(
                detection_data, "tool_timeout_seconds", defaults.tool_timeout_seconds
            ),
            apply_timeout_seconds=ConfigLoader._positiveFloat_get(
                detection_data, "apply_timeout_seconds", defaults.apply_timeout_seconds
            ),
        )

        logging_data = ConfigLoader._section_get(data, "logging")
        logging_defaults = LoggingConfig()
        logging = LoggingConfig(
            level=str(logging_data.get("level", logging_defaults.level)).upper(),
            file=logging_data.get("file"),
            format=str(logging_data.get("format", logging_defaults.format)),
        )

        return AppConfig(detection=detection, logging=logging)

    @staticmethod
    def _section_get(data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"'{name}' section must be a mapping")
        return section

    @staticmethod
    def _positiveFloat_get(section: Dict[str, Any], key: str, default: float) -> float:
        if key not in section:
            return default
        try:
            value = float(section[key])
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"'{key}' must be a number") from exc
        if value <= 0:
            raise ConfigError(f"'{key}' must be positive")
        return value

    @staticmethod
    def config_load(file_path: Optional[Path] = None) -> AppConfig:
        """
        Load configuration from file

        Args:
            file_path: Optional path to config file. If None, searches standard
                locations and falls back to defaults when nothing is found.

        Returns:
            Parsed AppConfig object

        Raises:
            FileNotFoundError: If an explicit config file does not exist
            ConfigError: If config file is invalid
        """
        if file_path is None:
            file_path = ConfigLoader.configFile_find()
            if file_path is None:
                return AppConfig()

        data = ConfigLoader.yaml_load(file_path)
        return ConfigLoader.config_parse(data)

    @staticmethod
    def configWithOverrides_load(
        file_path: Optional[Path] = None,
        **overrides: Any
    ) -> AppConfig:
        """
        Load configuration and apply command-line overrides

        Args:
            file_path: Optional path to config file
            **overrides: Key-value pairs to override config values

        Returns:
            AppConfig object with overrides applied

        Example:
            config = ConfigLoader.configWithOverrides_load(
                debug_mode=True,
                log_file="/tmp/hyprscale.log",
            )
        """
        config = ConfigLoader.config_load(file_path)

        flags: Dict[str, bool] = {}
        for name in ("no_hyprland_check", "debug_mode", "force_live_mode", "is_test_mode"):
            if overrides.get(name) is not None:
                flags[name] = bool(overrides[name])
        config = replace(config, **flags)

        logging = config.logging
        if overrides.get("log_level") is not None:
            logging = replace(logging, level=str(overrides["log_level"]).upper())
        if overrides.get("log_file") is not None:
            logging = replace(logging, file=overrides["log_file"])

        return replace(config, logging=logging)
