"""Logging setup for the aq CLI.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves. The CLI installs a single Rich handler on
stderr so that log records do not mix with listed paths on stdout.
"""

import logging

from rich.logging import RichHandler

from antiquarantine.utils.formatting import err_console

_HANDLER_NAME = "aq-rich"


def resolve_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a logging level.

    Args:
        verbose: Show debug records.
        quiet: Show errors only. Ignored when verbose is set.

    Returns:
        Logging level for the ``antiquarantine`` logger.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Install the Rich stderr handler on the package logger.

    Calling this more than once replaces the level but never stacks
    additional handlers.

    Args:
        verbose: Show debug records.
        quiet: Show errors only.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("antiquarantine")
    logger.setLevel(resolve_level(verbose=verbose, quiet=quiet))

    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = RichHandler(
            console=err_console,
            show_time=verbose,
            show_path=verbose,
            markup=False,
            rich_tracebacks=True,
        )
        handler.set_name(_HANDLER_NAME)
        logger.addHandler(handler)
        logger.propagate = False

    return logger
