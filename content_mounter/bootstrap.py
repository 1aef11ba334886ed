"""Apply an AppConfig to the running process."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import AppConfig
from .i18n import set_default_locale
from .logging_utils import setup_logging


def bootstrap(cfg: AppConfig, log_dir: Path | None = None) -> logging.Logger:
    """Set the default locale and configure logging.

    Args:
        cfg: Loaded application configuration
        log_dir: Directory for the log file, when file logging is enabled

    Returns:
        The configured ``content_mounter`` logger
    """
    set_default_locale(cfg.locale.default)
    logger = setup_logging(cfg.logging, log_dir)
    logger.debug(
        "Mounter configured",
        extra={"default_locale": cfg.locale.default},
    )
    return logger
