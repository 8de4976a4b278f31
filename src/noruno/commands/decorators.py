"""Decorators for command functions."""

import asyncio
import inspect
import functools
import time
import traceback
from collections.abc import Callable

import typer

from noruno.models.exceptions import (
    ConfigurationError,
    InvalidOperationError,
    NorunoError,
    NotFoundError,
    PersistenceError,
    TransportError,
)
from noruno.utils import exit_codes
from noruno.utils.logger import get_logger
from noruno.utils.ui.formatters import format_error

_EXIT_CODES: list[tuple[type[NorunoError], int]] = [
    (NotFoundError, exit_codes.ERROR_NOT_FOUND),
    (ConfigurationError, exit_codes.ERROR_INVALID_ARGS),
    (InvalidOperationError, exit_codes.ERROR_INVALID_ARGS),
    (TransportError, exit_codes.ERROR_NETWORK),
    (PersistenceError, exit_codes.ERROR_PERSISTENCE),
]


def exit_code_for(error: NorunoError) -> int:
    """Semantic exit code for an application error."""
    for error_type, code in _EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return exit_codes.ERROR_GENERAL


def command_wrapper(func: Callable):
    """Run a (possibly async) command, logging it and mapping errors to exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            logger.info("command completed: %s (%.3fs)", cmd, time.monotonic() - start)
            return result

        except NorunoError as e:
            code = exit_code_for(e)
            logger.error(
                "command failed: %s (%.3fs) - %s [%s]",
                cmd,
                time.monotonic() - start,
                str(e),
                exit_codes.get_exit_code_name(code),
            )
            format_error(str(e))
            raise typer.Exit(code=code) from e

        except typer.Exit:
            raise

        except Exception as e:
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                time.monotonic() - start,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

    return wrapper
