"""
Logging configuration.

We use a YAML logging config (`src/beachmatch/config/logging.yaml`) and then apply
runtime overrides from settings (e.g., `BEACHMATCH_LOG_LEVEL`).
"""

from __future__ import annotations

import logging.config

from beachmatch.config.settings import get_logging_config, get_settings


def configure_logging(level: str | None = None) -> None:
    """Configure the Python logging system based on packaged YAML config + settings."""
    settings = get_settings()
    # Copy so the cached config is never mutated between calls.
    config = dict(get_logging_config())
    config["root"] = dict(config.get("root", {}))
    config["handlers"] = {k: dict(v) for k, v in config.get("handlers", {}).items()}

    level = (level or settings.app.log_level).upper()
    config["root"]["level"] = level
    for handler in config["handlers"].values():
        if "level" in handler:
            handler["level"] = level

    logging.config.dictConfig(config)
