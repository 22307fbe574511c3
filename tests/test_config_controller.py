"""Tests for the YAML configuration controller."""

from __future__ import annotations

import pytest

from config.controller import ConfigController, ConfigError
from diagnostics.process_active import ListingErrorMode


@pytest.fixture(autouse=True)
def _reset_config_singleton(monkeypatch) -> None:
    monkeypatch.setattr(ConfigController, "_instance", None)


def _write_config(config_dir, default: str, override: str | None = None) -> None:
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "default.yaml").write_text(default, encoding="utf-8")
    if override is not None:
        (config_dir / "override.yaml").write_text(override, encoding="utf-8")


def test_packaged_defaults_load() -> None:
    """The shipped default.yaml yields the ps -efww listing in collapse mode."""

    settings = ConfigController.get_instance().process_active_settings()

    assert settings.listing_command == ("ps", "-efww")
    assert settings.listing_errors is ListingErrorMode.COLLAPSE
    assert settings.commands == ()


def test_empty_config_gets_defaults(tmp_path) -> None:
    _write_config(tmp_path, "{}")

    controller = ConfigController(config_dir=tmp_path)

    assert controller.get_config()["log_level"] == "INFO"
    settings = controller.process_active_settings()
    assert settings.listing_command == ("ps", "-efww")
    assert settings.listing_errors is ListingErrorMode.COLLAPSE


def test_override_is_deep_merged(tmp_path) -> None:
    """Override values replace defaults without dropping sibling keys."""

    _write_config(
        tmp_path,
        "checks:\n"
        "  process_active:\n"
        "    listing_command: [ps, aux]\n"
        "    commands: [nginx]\n",
        "log_level: debug\n"
        "checks:\n"
        "  process_active:\n"
        "    listing_errors: RAISE\n",
    )

    controller = ConfigController(config_dir=tmp_path)
    settings = controller.process_active_settings()

    assert controller.get_config()["log_level"] == "DEBUG"
    assert settings.listing_command == ("ps", "aux")
    assert settings.listing_errors is ListingErrorMode.RAISE
    assert settings.commands == ("nginx",)


def test_listing_command_may_be_a_string(tmp_path) -> None:
    _write_config(
        tmp_path,
        "checks:\n  process_active:\n    listing_command: ps -e -o args\n",
    )

    settings = ConfigController(config_dir=tmp_path).process_active_settings()

    assert settings.listing_command == ("ps", "-e", "-o", "args")


def test_unknown_listing_error_mode_is_rejected(tmp_path) -> None:
    _write_config(tmp_path, "checks:\n  process_active:\n    listing_errors: ignore\n")

    with pytest.raises(ConfigError, match="listing_errors"):
        ConfigController(config_dir=tmp_path)


def test_commands_must_be_a_list(tmp_path) -> None:
    _write_config(tmp_path, "checks:\n  process_active:\n    commands: nginx\n")

    with pytest.raises(ConfigError, match="commands"):
        ConfigController(config_dir=tmp_path)


def test_invalid_yaml_is_reported(tmp_path) -> None:
    _write_config(tmp_path, "checks: [unclosed\n")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        ConfigController(config_dir=tmp_path)


def test_second_instance_is_refused(tmp_path) -> None:
    _write_config(tmp_path, "{}")

    first = ConfigController.get_instance(config_dir=tmp_path)

    assert ConfigController.get_instance() is first
    with pytest.raises(RuntimeError):
        ConfigController(config_dir=tmp_path)


def test_command_entries_must_be_strings(tmp_path) -> None:
    """A null entry must not turn into the search token "None"."""

    _write_config(tmp_path, "checks:\n  process_active:\n    commands: [nginx, null]\n")

    with pytest.raises(ConfigError, match="entries must be strings"):
        ConfigController(config_dir=tmp_path)
