from __future__ import annotations

"""Central logging configuration for the site builder.

Import and call :func:`setup_logging` at application start-up.
"""

import logging
import logging.config
import os
from typing import Any, Dict

from site_builder.config import ConfigManager

__all__ = ["setup_logging"]

_EDIT_LOGGERS = (
    "site_builder.core.services.structure_editing_service",
    "site_builder.core.services.reorder_service",
    "site_builder.core.services.undo_service",
    "site_builder.editor.controller",
)


def setup_logging() -> None:
    """Configure logging for the application using configuration from YAML files."""
    log_dir = os.environ.get("SITE_BUILDER_LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "app.log")

    logging_config: Dict[str, Any] = ConfigManager().get_logging_config()
    if logging_config.get("version"):
        # Point the file handler at the resolved log directory
        if "file" in logging_config.get("handlers", {}):
            logging_config = {
                **logging_config,
                "handlers": {
                    **logging_config["handlers"],
                    "file": {**logging_config["handlers"]["file"], "filename": log_file},
                },
            }
        try:
            logging.config.dictConfig(logging_config)
            logging.info("===== Logging initialised from config files =====")
        except (ValueError, TypeError, AttributeError, ImportError) as exc:
            _setup_minimal_logging()
            logging.error("Invalid logging config, using minimal fallback: %s", exc)
    else:
        _setup_minimal_logging()
        logging.warning("===== Logging initialised with minimal fallback (no config) =====")

    _apply_debug_overrides()


def _setup_minimal_logging() -> None:
    """Set up minimal console-only logging when config is unavailable."""
    minimal_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': 'INFO',
            },
        },
        'root': {
            'level': 'INFO',
            'handlers': ['console'],
        },
    }
    logging.config.dictConfig(minimal_config)


def _apply_debug_overrides() -> None:
    """Apply environment-driven module-specific debug overrides.

    Supports:
    - SITE_BUILDER_DEBUG_EDITS=true  -> DEBUG for editing services and controller
    - SITE_BUILDER_DEBUG_MODULES=comma,separated,logger,names -> DEBUG for listed loggers
    """
    debug_edits = os.environ.get('SITE_BUILDER_DEBUG_EDITS', '').strip().lower() in {'1', 'true', 'yes', 'on'}
    extra_modules = os.environ.get('SITE_BUILDER_DEBUG_MODULES', '').strip()
    targets = []
    if debug_edits:
        targets.extend(_EDIT_LOGGERS)
    if extra_modules:
        targets.extend([m.strip() for m in extra_modules.split(',') if m.strip()])
    for name in targets:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        # Ensure at least one handler emits DEBUG for this logger
        if not any(h.level <= logging.DEBUG for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
            logger.addHandler(handler)
        logger.info("Debug override active for logger '%s'", name)
