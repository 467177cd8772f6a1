"""Opt-in console logging for spindle_opt.

Library modules only create loggers with ``logging.getLogger(__name__)``; they
never configure handlers. Applications (and the command-line entry point) can
call :func:`configure_logging` to get progress output on the console.
"""

import logging

LOGGER_NAME = "spindle_opt"


def configure_logging(level: int = logging.INFO) -> None:
    """Attach a console handler to the ``spindle_opt`` logger.

    The handler is only attached if neither the root logger nor the package
    logger already has handlers, so an application's own logging setup always
    takes precedence.

    Args:
        level: Logging level for the package logger (default INFO).
    """
    root = logging.getLogger()
    package_logger = logging.getLogger(LOGGER_NAME)

    if root.handlers or package_logger.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
