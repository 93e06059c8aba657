from __future__ import annotations

"""
Logging Lifecycle.

Idempotent configuration of the root logger for the command-line tool.
Library code never calls this; it only logs through module-level loggers.
"""

import logging
from typing import List

from includedir.infra.logging.config import LoggingConfig, parse_level
from includedir.infra.logging.handlers import (
    create_console_handler,
    create_rotating_file_handler,
    is_our_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_includedir_configured"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach the includedir handlers to the root logger.

    Repeated calls are no-ops unless 'force' is set, in which case the
    previously installed handlers are closed and replaced.

    Args:
        cfg: Structural configuration for the logging system.
        force: If True, re-initialize handlers.

    Returns:
        logging.Logger: The configured root logger.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level_int = parse_level(cfg.level)
    root.setLevel(level_int)
    _remove_our_handlers(root)

    handlers: List[logging.Handler] = []
    if cfg.console:
        handlers.append(create_console_handler(level_int, logging.Formatter(cfg.console_fmt)))
    if cfg.log_file:
        fh = create_rotating_file_handler(
            cfg.log_file,
            level_int,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh:
            handlers.append(fh)

    for h in handlers:
        root.addHandler(h)

    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    return root


def reset_logging() -> None:
    """Detach every includedir handler and clear the configured flag."""
    root = logging.getLogger()
    _remove_our_handlers(root)
    setattr(root, _CONFIGURED_FLAG_ATTR, False)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if is_our_handler(h):
            root.removeHandler(h)
            h.close()
