#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Application error handling for the trustroot command-line tools."""

import logging
import sys
from functools import wraps
from typing import Any, Callable, Optional

import click

from trustroot import TRUST_DEBUG_LOG_FILE, TRUST_DEBUG_LOGGING_DISABLED
from trustroot.exceptions import TrustError

logger = logging.getLogger(__name__)


class TrustAppError(TrustError):
    """Non-fatal application error with a process exit code.

    :cvar fmt: Format string template for error message display.
    """

    fmt = "{description}"

    def __init__(self, desc: Optional[str] = None, error_code: int = 1) -> None:
        """Initialize the AppError.

        :param desc: Description to print out on command line, defaults to None
        :param error_code: Error code passed to OS, defaults to 1
        """
        super().__init__(desc)
        self.description = desc
        self.error_code = error_code


def catch_trust_error(function: Callable) -> Callable:
    """Catch and report errors of a command-line entry point.

    ``TrustAppError`` exits with its own error code (default 1), any other
    ``TrustError`` exits with 2 and unexpected exceptions with 3. The error is
    printed to stderr as ``<ClassName>: <message>``, the traceback goes to the
    debug log only.

    :param function: The function to be decorated.
    :return: The decorated function.
    """

    @wraps(function)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return function(*args, **kwargs)
        except TrustAppError as app_exc:
            if app_exc.description:
                click.echo(f"{app_exc.__class__.__name__}: {app_exc}", err=True)
            if 0 < app_exc.error_code < 256:
                sys.exit(app_exc.error_code)
            sys.exit(1)
        except (AssertionError, TrustError) as trust_exc:
            click.echo(f"{trust_exc.__class__.__name__}: {trust_exc}", err=True)
            logger.debug(str(trust_exc), exc_info=True)
            if not TRUST_DEBUG_LOGGING_DISABLED:
                click.secho(
                    f"See debug log file: {TRUST_DEBUG_LOG_FILE} for more info", fg="yellow"
                )
            sys.exit(2)
        except (Exception, KeyboardInterrupt) as base_exc:  # pylint: disable=broad-except
            click.echo(f"GENERAL ERROR: {type(base_exc).__name__}: {base_exc}", err=True)
            logger.debug(str(base_exc), exc_info=True)
            if not TRUST_DEBUG_LOGGING_DISABLED:
                click.secho(
                    f"See debug log file: {TRUST_DEBUG_LOG_FILE} for more info.", fg="yellow"
                )
            sys.exit(3)

    return wrapper
