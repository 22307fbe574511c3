"""Configuration package utilities."""

__all__ = ["ConfigController", "ConfigError"]


def __getattr__(name: str):
    if name == "ConfigController":
        from config.controller import ConfigController

        return ConfigController
    if name == "ConfigError":
        from config.controller import ConfigError

        return ConfigError
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
