"""Configuration controller for YAML-based settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from diagnostics.process_active import DEFAULT_LISTING_COMMAND, ListingErrorMode

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent


class ConfigError(ValueError):
    """Raised when a configuration value is missing or malformed."""


@dataclass(frozen=True)
class ConfigPaths:
    """Filesystem paths for configuration files."""

    config_dir: Path
    config_file: Path
    override_file: Path


@dataclass(frozen=True)
class ProcessActiveSettings:
    """Settings for process presence checks."""

    listing_command: tuple[str, ...]
    listing_errors: ListingErrorMode
    commands: tuple[str, ...]


class ConfigController:
    """Singleton controller for loading configuration."""

    _instance: "ConfigController | None" = None

    def __init__(
        self,
        config_dir: Path | None = None,
        config_file: str = "default.yaml",
    ) -> None:
        if ConfigController._instance is not None:
            raise RuntimeError("You cannot create another ConfigController class")

        config_dir = config_dir if config_dir is not None else DEFAULT_CONFIG_DIR
        self.paths = ConfigPaths(
            config_dir=config_dir,
            config_file=config_dir / config_file,
            override_file=config_dir / "override.yaml",
        )
        self.config: dict[str, Any] = {}
        self.load_config()

    @classmethod
    def get_instance(cls, config_dir: Path | None = None) -> "ConfigController":
        """Return the singleton instance, creating it on first use."""

        if cls._instance is None:
            cls._instance = cls(config_dir=config_dir)
        return cls._instance

    def load_config(self) -> None:
        """Load configuration from default and override YAML files."""

        config = self._read_yaml(self.paths.config_file)

        if self.paths.override_file.exists():
            override_config = self._read_yaml(self.paths.override_file)
            if override_config:
                config = self._deep_merge(config, override_config)

        self.config = self._normalize_config(config)

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        with path.open("r", encoding="utf-8") as file:
            try:
                data = yaml.safe_load(file) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config root must be a mapping in {path}")
        return data

    def get_config(self) -> dict[str, Any]:
        """Return the currently loaded configuration."""

        return dict(self.config)

    def process_active_settings(self) -> ProcessActiveSettings:
        """Return typed settings for process presence checks."""

        section = self.config["checks"]["process_active"]
        return ProcessActiveSettings(
            listing_command=tuple(section["listing_command"]),
            listing_errors=ListingErrorMode(section["listing_errors"]),
            commands=tuple(section["commands"]),
        )

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge dictionaries, overriding base values with override values."""

        merged = dict(base)
        for key, value in override.items():
            if (
                key in merged
                and isinstance(merged[key], dict)
                and isinstance(value, dict)
            ):
                merged[key] = self._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _normalize_config(self, config: dict[str, Any]) -> dict[str, Any]:
        """Fill defaults and validate the process check section."""

        normalized = dict(config)
        normalized["log_level"] = str(normalized.get("log_level", "INFO")).upper()

        checks_cfg = dict(normalized.get("checks") or {})
        process_cfg = dict(checks_cfg.get("process_active") or {})

        listing_command = process_cfg.get("listing_command", list(DEFAULT_LISTING_COMMAND))
        if isinstance(listing_command, str):
            listing_command = listing_command.split()
        if not isinstance(listing_command, list) or not listing_command:
            raise ConfigError("checks.process_active.listing_command must be a non-empty list")
        process_cfg["listing_command"] = [str(part) for part in listing_command]

        mode = str(process_cfg.get("listing_errors", ListingErrorMode.COLLAPSE.value)).lower()
        try:
            process_cfg["listing_errors"] = ListingErrorMode(mode).value
        except ValueError as exc:
            choices = ", ".join(item.value for item in ListingErrorMode)
            raise ConfigError(
                f"checks.process_active.listing_errors must be one of: {choices}"
            ) from exc

        commands = process_cfg.get("commands") or []
        if not isinstance(commands, list):
            raise ConfigError("checks.process_active.commands must be a list")
        if not all(isinstance(command, str) for command in commands):
            raise ConfigError("checks.process_active.commands entries must be strings")
        process_cfg["commands"] = list(commands)

        checks_cfg["process_active"] = process_cfg
        normalized["checks"] = checks_cfg
        return normalized
