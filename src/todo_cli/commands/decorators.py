"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from todo_cli.exceptions import TaskAlreadyCompletedError, TodoError
from todo_cli.utils.exit_codes import get_exit_code_name
from todo_cli.utils.logger import get_logger
from todo_cli.utils.ui.formatters import format_error, format_warning


def command_wrapper(func: Callable):
    """Wrap a command with logging and uniform error reporting.

    ``TodoError`` subclasses become an error line and ``typer.Exit`` with the
    error's exit code. Anything unexpected is logged with its traceback.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            result = func(*args, **kwargs)
            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except TaskAlreadyCompletedError as e:
            logger.info("command skipped: %s - %s", cmd, str(e))
            format_warning(str(e))
            raise typer.Exit(code=e.exit_code) from e

        except TodoError as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) [%s] - %s",
                cmd,
                elapsed,
                get_exit_code_name(e.exit_code),
                str(e),
            )
            format_error(str(e))
            raise typer.Exit(code=e.exit_code) from e

        except typer.Exit:
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            # Generic fallback for unexpected crashes
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=1) from e

    return wrapper
