#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Trustroot logging with colored console output and a rotating debug log."""

import logging
import logging.config
import logging.handlers
import os
import platform
import re
import sys
from datetime import datetime
from typing import Optional, TextIO

import colorama

from trustroot import TRUST_DEBUG_LOG_FILE, TRUST_DEBUG_LOGGING_DISABLED, __version__
from trustroot.exceptions import TrustError
from trustroot.utils.misc import find_file, load_configuration

colorama.just_fix_windows_console()

LOGGING_CONFIG_SEARCH_PATHS = [os.path.expanduser("~/.trust")]


def load_logging_config(search_paths: Optional[list[str]] = None) -> Optional[str]:
    """Apply ``logging.yaml`` found in the search paths.

    :param search_paths: Directories to look into, defaults to ``~/.trust``.
    :return: Path of the applied configuration, None if there is none.
    """
    config_file = find_file(
        "logging.yaml",
        use_cwd=False,
        search_paths=search_paths or LOGGING_CONFIG_SEARCH_PATHS,
        raise_exc=False,
    )
    if not config_file:
        return None
    try:
        logging.config.dictConfig(load_configuration(config_file))
    except (TrustError, ValueError, TypeError) as exc:
        logging.getLogger("trustroot").warning(
            f"Ignoring logging config {config_file}: {exc}"
        )
        return None
    return config_file


class ColoredFormatter(logging.Formatter):
    """Logging formatter coloring records by their level.

    :cvar COLORED_FORMATS: Color-coded format strings for each logging level.
    :cvar FORMATS: Plain text format strings for each logging level.
    """

    FORMAT = logging.BASIC_FORMAT
    FORMAT_DEBUG = FORMAT + " (%(relativeCreated)dms since start, %(filename)s:%(lineno)d)"

    COLORED_FORMATS = {
        logging.DEBUG: colorama.Fore.BLUE + FORMAT_DEBUG + colorama.Fore.RESET,
        logging.INFO: colorama.Fore.WHITE
        + colorama.Style.BRIGHT
        + FORMAT
        + colorama.Fore.RESET
        + colorama.Style.RESET_ALL,
        logging.WARNING: colorama.Fore.YELLOW + FORMAT_DEBUG + colorama.Fore.RESET,
        logging.ERROR: colorama.Fore.RED + FORMAT_DEBUG + colorama.Fore.RESET,
        logging.CRITICAL: colorama.Fore.RED
        + colorama.Style.BRIGHT
        + FORMAT_DEBUG
        + colorama.Fore.RESET
        + colorama.Style.RESET_ALL,
    }
    FORMATS = {
        logging.DEBUG: FORMAT_DEBUG,
        logging.INFO: FORMAT,
        logging.WARNING: FORMAT_DEBUG,
        logging.ERROR: FORMAT_DEBUG,
        logging.CRITICAL: FORMAT_DEBUG,
    }

    def __init__(self, colored: bool = True) -> None:
        super().__init__()
        self.colored = colored
        self.formats = self.COLORED_FORMATS if colored else self.FORMATS

    def format(self, record: logging.LogRecord) -> str:
        """Format the record using the level specific format.

        :param record: Input logging record to print.
        :return: Formatted logging string.
        """
        formatter = logging.Formatter(self.formats.get(record.levelno))
        if not self.colored and isinstance(record.msg, str):
            record.msg = re.sub(r"\x1b\[\d{1,3}m", "", record.msg)
        return formatter.format(record)


def install(
    level: Optional[int] = None,
    stream: Optional[TextIO] = None,
    colored: Optional[bool] = None,
    logger: Optional[logging.Logger] = None,
    create_debug_logger: bool = True,
) -> None:
    """Install trustroot log handlers.

    :param level: Console logging level, defaults to logging.WARNING
    :param stream: Stream to output logging, defaults to current sys.stderr
    :param colored: Colored output, detected from the stream when None
    :param logger: Logger to install to, defaults to the ``trustroot`` logger
    :param create_debug_logger: Create rotating debug log file handler
    """
    level = level or logging.WARNING
    stream = stream or sys.stderr
    target_logger = logger or logging.getLogger("trustroot")
    target_logger.setLevel(logging.DEBUG)

    color = hasattr(stream, "isatty") and stream.isatty() and "NO_COLOR" not in os.environ
    if colored is not None:
        color = colored

    # Replace console handler of a previous install
    for existing in list(target_logger.handlers):
        if type(existing) is logging.StreamHandler:  # pylint: disable=unidiomatic-typecheck
            target_logger.removeHandler(existing)

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(color))
    target_logger.addHandler(handler)

    load_logging_config()

    if not create_debug_logger or TRUST_DEBUG_LOGGING_DISABLED:
        return
    for existing in target_logger.handlers:
        if (
            isinstance(existing, logging.handlers.RotatingFileHandler)
            and existing.baseFilename == os.path.abspath(TRUST_DEBUG_LOG_FILE)
        ):
            return
    try:
        os.makedirs(os.path.dirname(TRUST_DEBUG_LOG_FILE), exist_ok=True)
        debug_handler = logging.handlers.RotatingFileHandler(
            TRUST_DEBUG_LOG_FILE, mode="a", maxBytes=1_000_000, backupCount=5, encoding="utf-8"
        )
    except OSError as exc:
        target_logger.warning(f"Failed to initialize debug logging: {exc}")
        return
    debug_handler.setFormatter(ColoredFormatter(colored=False))
    debug_handler.setLevel(logging.DEBUG)
    target_logger.addHandler(debug_handler)

    starter = f"* TRUST DEBUG LOGGING STARTED {datetime.now().strftime('%Y-%m-%d %H:%M:%S')} *"
    padding = len(starter) - 2
    target_logger.debug("*" * len(starter))
    target_logger.debug(starter)
    target_logger.debug(f"* trustroot version: {__version__}".ljust(padding) + " *")
    target_logger.debug(f"* Python version: {sys.version.split()[0]}".ljust(padding) + " *")
    target_logger.debug(f"* OS version: {platform.platform()}".ljust(padding) + " *")
    target_logger.debug(f"* Last command: {sys.argv}".ljust(padding) + " *")
    target_logger.debug("*" * len(starter))
