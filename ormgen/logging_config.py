"""
Logging setup for ormgen.

Modules obtain loggers through ``get_logger(__name__)``; the CLI calls
``setup_logging`` once to attach a rich handler to the package logger.
"""

import logging

from rich.logging import RichHandler

PACKAGE_LOGGER = "ormgen"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package logger."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(level: int = logging.WARNING, console=None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Logging level for the package logger
        console: Optional rich Console to log to (defaults to stderr)

    Returns:
        The configured package logger
    """
    global _configured

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if not _configured:
        handler_kwargs = {"rich_tracebacks": True, "show_path": False}
        if console is not None:
            handler_kwargs["console"] = console
        handler = RichHandler(**handler_kwargs)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True

    return logger

